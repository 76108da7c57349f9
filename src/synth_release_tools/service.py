"""Safe transaction service client for synth-release-tools."""

import logging
import os
from typing import Any, Dict, Optional

import requests
from eth_utils import to_checksum_address
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import HTTP_TIMEOUT, NETWORK_CONFIG, PROPOSAL_ORIGIN
from .exceptions import SafeServiceError, UnsupportedNetworkError
from .types import SafeTransaction

logger = logging.getLogger(__name__)


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Look up multisig configuration for a network.

    Raises:
        UnsupportedNetworkError: If the network is not configured
    """
    if network not in NETWORK_CONFIG:
        raise UnsupportedNetworkError(
            f"Network '{network}' has no Safe transaction service configured "
            f"(supported: {', '.join(sorted(NETWORK_CONFIG))})"
        )
    return NETWORK_CONFIG[network]


class SafeServiceClient:
    """
    Minimal client for the Safe transaction service.

    Reads the next nonce of a Safe and submits transaction proposals.
    GET requests are retried up to `retries` times after the first attempt
    on transient failures; proposals are posted once.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = HTTP_TIMEOUT,
        retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        retry = Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @classmethod
    def for_network(cls, network: str, base_url: Optional[str] = None, **kwargs) -> "SafeServiceClient":
        """
        Build a client for a configured network.

        $SAFE_TX_SERVICE_URL overrides the hosted service URL when base_url is not given.
        """
        if base_url is None:
            base_url = os.environ.get("SAFE_TX_SERVICE_URL") or get_network_config(network)["tx_service_url"]
        return cls(base_url, **kwargs)

    def _safe_url(self, safe_address: str, suffix: str = "") -> str:
        return f"{self.base_url}/api/v1/safes/{to_checksum_address(safe_address)}/{suffix}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise SafeServiceError(f"Network error calling Safe transaction service: {e}") from e

        if not 200 <= response.status_code < 300:
            raise SafeServiceError(
                f"Safe transaction service request {method} {url} failed "
                f"with status {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )
        return response

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = self._request("GET", url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise SafeServiceError(
                f"Invalid JSON from Safe transaction service at {url}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    def get_safe_nonce(self, safe_address: str) -> int:
        """Return the Safe's on-chain nonce as reported by the service."""
        info = self._get_json(self._safe_url(safe_address))
        try:
            return int(info["nonce"])
        except (KeyError, TypeError, ValueError) as e:
            raise SafeServiceError(f"Safe info for {safe_address} has no nonce") from e

    def get_next_nonce(self, safe_address: str) -> int:
        """
        Return the next unused nonce for a Safe.

        Pending (queued, not executed) proposals reserve nonces, so the next
        nonce is one past the highest pending one, or the on-chain nonce when
        nothing is queued.

        Args:
            safe_address: Safe contract address

        Returns:
            Next nonce

        Raises:
            SafeServiceError: If the service fails or returns malformed data
        """
        nonce = self.get_safe_nonce(safe_address)
        pending = self._get_json(
            self._safe_url(safe_address, "multisig-transactions/"),
            params={"executed": "false", "nonce__gte": nonce},
        )

        try:
            pending_nonces = [int(tx["nonce"]) for tx in pending.get("results", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise SafeServiceError(f"Malformed pending transactions for {safe_address}") from e

        if pending_nonces:
            return max(pending_nonces) + 1
        return nonce

    def propose_transaction(
        self,
        safe_address: str,
        tx: SafeTransaction,
        safe_tx_hash: str,
        sender: str,
        signature: str,
    ) -> None:
        """
        Submit a signed transaction proposal for co-signing.

        Raises:
            SafeServiceError: If the service rejects the proposal (e.g. a
                nonce already consumed by another proposal)
        """
        payload = {
            "to": to_checksum_address(tx.to),
            "value": str(tx.value),
            "data": tx.data if tx.data != "0x" else None,
            "operation": int(tx.operation),
            "safeTxGas": str(tx.safe_tx_gas),
            "baseGas": str(tx.base_gas),
            "gasPrice": str(tx.gas_price),
            "gasToken": to_checksum_address(tx.gas_token),
            "refundReceiver": to_checksum_address(tx.refund_receiver),
            "nonce": tx.nonce,
            "contractTransactionHash": safe_tx_hash,
            "sender": to_checksum_address(sender),
            "signature": signature,
            "origin": PROPOSAL_ORIGIN,
        }
        self._request("POST", self._safe_url(safe_address, "multisig-transactions/"), json=payload)
        logger.info("Proposed Safe transaction %s to %s (nonce %d)", safe_tx_hash, safe_address, tx.nonce)
