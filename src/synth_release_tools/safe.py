"""Safe transaction hashing and delegate signing for synth-release-tools."""

import os
from typing import Optional

from eth_abi import encode
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError, decode_hex, encode_hex, keccak, to_checksum_address

from .exceptions import SignerNotConfiguredError
from .types import SafeTransaction

# Safe >= 1.3.0 typed-data scheme
DOMAIN_SEPARATOR_TYPEHASH = keccak(text="EIP712Domain(uint256 chainId,address verifyingContract)")
SAFE_TX_TYPEHASH = keccak(
    text=(
        "SafeTx(address to,uint256 value,bytes data,uint8 operation,uint256 safeTxGas,"
        "uint256 baseGas,uint256 gasPrice,address gasToken,address refundReceiver,uint256 nonce)"
    )
)

DEFAULT_ACCOUNT_PATH = "m/44'/60'/0'/0/0"


def domain_separator(chain_id: int, safe_address: str) -> bytes:
    return keccak(
        encode(
            ["bytes32", "uint256", "address"],
            [DOMAIN_SEPARATOR_TYPEHASH, chain_id, to_checksum_address(safe_address)],
        )
    )


def safe_tx_struct_hash(tx: SafeTransaction) -> bytes:
    return keccak(
        encode(
            [
                "bytes32",
                "address",
                "uint256",
                "bytes32",
                "uint8",
                "uint256",
                "uint256",
                "uint256",
                "address",
                "address",
                "uint256",
            ],
            [
                SAFE_TX_TYPEHASH,
                to_checksum_address(tx.to),
                tx.value,
                keccak(decode_hex(tx.data)),
                int(tx.operation),
                tx.safe_tx_gas,
                tx.base_gas,
                tx.gas_price,
                to_checksum_address(tx.gas_token),
                to_checksum_address(tx.refund_receiver),
                tx.nonce,
            ],
        )
    )


def get_safe_tx_hash(chain_id: int, safe_address: str, tx: SafeTransaction) -> bytes:
    """
    Compute the Safe transaction hash the Safe contract verifies signatures against.

    keccak256(0x19 || 0x01 || domainSeparator || safeTxStructHash)

    Args:
        chain_id: Chain the Safe lives on
        safe_address: Safe contract address (EIP-712 verifying contract)
        tx: Transaction to hash

    Returns:
        32-byte hash
    """
    return keccak(
        b"\x19\x01" + domain_separator(chain_id, safe_address) + safe_tx_struct_hash(tx)
    )


class DelegateSigner:
    """Hashes Safe transactions and signs them with a delegate's local key."""

    def __init__(self, account: Optional[LocalAccount], chain_id: int):
        self._account = account
        self.chain_id = chain_id

    @classmethod
    def from_key(cls, private_key: str, chain_id: int) -> "DelegateSigner":
        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise SignerNotConfiguredError(f"Invalid delegate private key: {e}") from e
        return cls(account, chain_id)

    @classmethod
    def from_mnemonic(
        cls, mnemonic: str, chain_id: int, account_path: str = DEFAULT_ACCOUNT_PATH
    ) -> "DelegateSigner":
        Account.enable_unaudited_hdwallet_features()
        try:
            account = Account.from_mnemonic(mnemonic.strip(), account_path=account_path)
        except (ValidationError, ValueError, TypeError) as e:
            raise SignerNotConfiguredError(f"Invalid delegate mnemonic: {e}") from e
        return cls(account, chain_id)

    @classmethod
    def from_env(
        cls,
        chain_id: int,
        private_key: Optional[str] = None,
        mnemonic: Optional[str] = None,
    ) -> "DelegateSigner":
        """
        Resolve the delegate from explicit key material or the environment.

        Precedence: private_key, mnemonic, $DELEGATE_PRIVATE_KEY, $MNEMONIC.
        With no key material the signer has no address; proposing with it
        fails before any network call.
        """
        if private_key is None and mnemonic is None:
            private_key = os.environ.get("DELEGATE_PRIVATE_KEY") or None
            if private_key is None:
                mnemonic = os.environ.get("MNEMONIC") or None

        if private_key is not None:
            return cls.from_key(private_key, chain_id)
        if mnemonic is not None:
            return cls.from_mnemonic(mnemonic, chain_id)
        return cls(None, chain_id)

    @property
    def address(self) -> Optional[str]:
        if self._account is None:
            return None
        return self._account.address

    def get_transaction_hash(self, safe_address: str, tx: SafeTransaction) -> bytes:
        return get_safe_tx_hash(self.chain_id, safe_address, tx)

    def sign_hash(self, message_hash: bytes) -> str:
        """
        Sign a Safe transaction hash (raw ECDSA, v in {27, 28}).

        Returns:
            0x-prefixed 65-byte signature
        """
        if self._account is None:
            raise SignerNotConfiguredError("Delegate signer is not configured")
        signed = self._account.unsafe_sign_hash(message_hash)
        return encode_hex(bytes(signed.signature))
