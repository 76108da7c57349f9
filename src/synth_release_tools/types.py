"""Data types, dataclasses and service protocols for synth-release-tools."""

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Protocol

from .constants import ZERO_ADDRESS
from .exceptions import ManifestValidationError

NetworkDeployments = Dict[str, str]  # contract name -> address


@dataclass
class ReleaseManifest:
    """Cumulative record of deployed addresses for one release version."""

    version: Optional[str] = None
    networks: Dict[str, NetworkDeployments] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.version is None and not self.networks

    @classmethod
    def from_dict(cls, data: Any) -> "ReleaseManifest":
        """
        Build a manifest from decoded JSON, validating its shape.

        Args:
            data: Decoded contents of a contracts.json file

        Returns:
            ReleaseManifest (empty if data is an empty object)

        Raises:
            ManifestValidationError: If the document does not match the schema
        """
        if not isinstance(data, dict):
            raise ManifestValidationError(
                f"Release manifest must be a JSON object, got {type(data).__name__}"
            )

        version = data.get("version")
        if version is not None and not isinstance(version, str):
            raise ManifestValidationError("Release manifest 'version' must be a string")

        # Absent networks means a manifest nothing was recorded into yet
        if "networks" not in data:
            return cls(version=version, networks={})

        networks = data["networks"]
        if not isinstance(networks, dict):
            raise ManifestValidationError("Release manifest 'networks' must be an object")

        for network, contracts in networks.items():
            if not isinstance(contracts, dict):
                raise ManifestValidationError(
                    f"Deployments for network '{network}' must be an object"
                )
            for name, address in contracts.items():
                if not isinstance(address, str):
                    raise ManifestValidationError(
                        f"Address of '{name}' on network '{network}' must be a string"
                    )

        return cls(version=version, networks=copy.deepcopy(networks))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk JSON shape ({} for the empty manifest)."""
        if self.is_empty:
            return {}
        result: Dict[str, Any] = {}
        if self.version is not None:
            result["version"] = self.version
        result["networks"] = copy.deepcopy(self.networks)
        return result


class OperationType(IntEnum):
    """Safe operation kind."""

    CALL = 0
    DELEGATE_CALL = 1


@dataclass(frozen=True)
class MetaTransaction:
    """A single call inside a multisig batch."""

    to: str  # Checksummed address
    value: int = 0  # Wei
    data: str = "0x"  # ABI-encoded call payload
    operation: OperationType = OperationType.CALL


@dataclass(frozen=True)
class SafeTransaction:
    """A complete Safe transaction, ready to be hashed."""

    to: str
    value: int
    data: str
    operation: OperationType
    nonce: int
    safe_tx_gas: int = 0
    base_gas: int = 0
    gas_price: int = 0
    gas_token: str = ZERO_ADDRESS
    refund_receiver: str = ZERO_ADDRESS


@dataclass(frozen=True)
class ProposalReceipt:
    """What was submitted to the Safe transaction service."""

    safe_address: str
    safe_tx_hash: str  # 0x-prefixed
    sender: str
    signature: str  # 0x-prefixed
    transaction: SafeTransaction


@dataclass(frozen=True)
class QueuedTransaction:
    """A call stored for later batch proposal."""

    sender: str
    to: str
    data: str
    value: str = "0"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueuedTransaction":
        """
        Build a queued call from its stored form.

        Raises:
            ValueError: If the entry is not an object or lacks from, to or data
        """
        if not isinstance(data, dict):
            raise ValueError(f"Queued call must be an object, got {type(data).__name__}")
        missing = [key for key in ("from", "to", "data") if not data.get(key)]
        if missing:
            raise ValueError(f"Queued call {data} is missing {', '.join(missing)}")

        return cls(
            sender=data["from"],
            to=data["to"],
            data=data["data"],
            value=str(data.get("value") or "0"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.sender, "to": self.to, "data": self.data, "value": self.value}


class NonceSource(Protocol):
    def get_next_nonce(self, safe_address: str) -> int: ...


class TransactionSigner(Protocol):
    @property
    def address(self) -> Optional[str]: ...

    def get_transaction_hash(self, safe_address: str, tx: SafeTransaction) -> bytes: ...

    def sign_hash(self, message_hash: bytes) -> str: ...


class ProposalSink(Protocol):
    def propose_transaction(
        self,
        safe_address: str,
        tx: SafeTransaction,
        safe_tx_hash: str,
        sender: str,
        signature: str,
    ) -> None: ...
