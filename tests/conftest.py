"""Shared pytest fixtures for synth-release-tools tests."""

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from eth_utils import to_checksum_address

from synth_release_tools.safe import DelegateSigner
from synth_release_tools.types import SafeTransaction

# Well-known hardhat development account #0
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEV_MNEMONIC = "test test test test test test test test test test test junk"

SAFE_ADDRESS = to_checksum_address("0x9520b477aa81180e6ddc006fc09fb6d3eb4e807a")
SERVICE_URL = "https://safe-transaction-mainnet.safe.global"


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


def write_release(releases_dir: Path, version: str, data) -> Path:
    """Create releases/{version}/contracts.json with the given content."""
    return write_json(releases_dir / version / "contracts.json", data)


def read_release(releases_dir: Path, version: str):
    with open(releases_dir / version / "contracts.json") as f:
        return json.load(f)


@pytest.fixture
def releases_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) releases directory."""
    return tmp_path / "releases"


@pytest.fixture
def deployments_dir(tmp_path: Path) -> Path:
    """Create a hardhat-deploy records tree with a mainnet network."""
    root = tmp_path / "deployments"
    network_dir = root / "mainnet"
    write_json(network_dir / "Controller.json", {"address": "0x1", "abi": []})
    write_json(network_dir / "Treasury.json", {"address": "0x2", "abi": []})
    (network_dir / ".chainId").write_text("1")
    (network_dir / "solcInputs").mkdir()
    write_json(network_dir / "solcInputs" / "abc123.json", {"language": "Solidity"})
    return root


@pytest.fixture
def dev_signer() -> DelegateSigner:
    return DelegateSigner.from_key(DEV_PRIVATE_KEY, chain_id=1)


class FakeNonceSource:
    """Returns canned nonces and records which Safes were asked."""

    def __init__(self, nonce: int = 7):
        self.nonce = nonce
        self.calls: List[str] = []

    def get_next_nonce(self, safe_address: str) -> int:
        self.calls.append(safe_address)
        return self.nonce


class FakeSigner:
    """Deterministic hasher/signer for orchestration tests."""

    def __init__(self, address: Optional[str] = DEV_ADDRESS):
        self._address = address
        self.hashed: List[SafeTransaction] = []
        self.signed: List[bytes] = []

    @property
    def address(self) -> Optional[str]:
        return self._address

    def get_transaction_hash(self, safe_address: str, tx: SafeTransaction) -> bytes:
        self.hashed.append(tx)
        return bytes([tx.nonce % 256]) * 32

    def sign_hash(self, message_hash: bytes) -> str:
        self.signed.append(message_hash)
        return "0x" + "ab" * 65


class FakeSink:
    """Records submitted proposals."""

    def __init__(self):
        self.proposals: List[Dict] = []

    def propose_transaction(self, safe_address, tx, safe_tx_hash, sender, signature) -> None:
        self.proposals.append(
            {
                "safe_address": safe_address,
                "tx": tx,
                "safe_tx_hash": safe_tx_hash,
                "sender": sender,
                "signature": signature,
            }
        )


@pytest.fixture
def nonce_source() -> FakeNonceSource:
    return FakeNonceSource()


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()
