"""Multisig batch construction for synth-release-tools."""

from typing import Any, Iterable, List, Mapping, Union

from eth_abi import encode
from eth_abi.packed import encode_packed
from eth_utils import decode_hex, encode_hex, is_address, to_checksum_address

from .constants import MULTISEND_CALL_ONLY_ADDRESS, MULTISEND_SELECTOR
from .types import MetaTransaction, OperationType, SafeTransaction

CallDescriptor = Union[MetaTransaction, Mapping[str, Any]]


def _parse_value(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


def _normalize_data(data: Any) -> str:
    if data is None or data == "":
        return "0x"
    if isinstance(data, (bytes, bytearray)):
        return encode_hex(bytes(data))
    # Round-trip through bytes to reject non-hex payloads early
    return encode_hex(decode_hex(data))


def _to_meta_transaction(descriptor: CallDescriptor) -> MetaTransaction:
    if isinstance(descriptor, MetaTransaction):
        to, value, data = descriptor.to, descriptor.value, descriptor.data
    else:
        to = descriptor.get("to")
        value = descriptor.get("value")
        data = descriptor.get("data")

    if not to or not is_address(to):
        raise ValueError(f"Invalid call destination: {to!r}")

    return MetaTransaction(
        to=to_checksum_address(to),
        value=_parse_value(value),
        data=_normalize_data(data),
        operation=OperationType.CALL,
    )


def build_batch(call_descriptors: Iterable[CallDescriptor]) -> List[MetaTransaction]:
    """
    Turn call descriptors into an ordered multisig batch.

    Each descriptor gives a destination, an optional native value (defaults to
    0; ints or decimal/hex strings) and an optional ABI-encoded payload.
    Every entry is a plain CALL. Order is the on-chain execution order.

    Args:
        call_descriptors: MetaTransaction objects or mappings with to/value/data

    Returns:
        List of MetaTransaction

    Raises:
        ValueError: If a destination is not a valid address or data is not hex
    """
    return [_to_meta_transaction(d) for d in call_descriptors]


def encode_multisend(batch: Iterable[MetaTransaction]) -> str:
    """
    Encode a batch as MultiSend calldata: multiSend(bytes transactions).

    Each transaction is packed as
    (uint8 operation, address to, uint256 value, uint256 dataLength, bytes data).

    Returns:
        0x-prefixed calldata
    """
    packed = b""
    for tx in batch:
        data = decode_hex(tx.data)
        packed += encode_packed(
            ["uint8", "address", "uint256", "uint256", "bytes"],
            [int(tx.operation), tx.to, tx.value, len(data), data],
        )
    return encode_hex(decode_hex(MULTISEND_SELECTOR) + encode(["bytes"], [packed]))


def batch_to_transaction(
    batch: List[MetaTransaction],
    nonce: int,
    multisend_address: str = MULTISEND_CALL_ONLY_ADDRESS,
) -> SafeTransaction:
    """
    Build the Safe transaction executing a batch.

    A single call is sent as-is. Anything else (including the empty batch)
    is delegate-called through MultiSendCallOnly.

    Args:
        batch: Ordered calls from build_batch
        nonce: Safe nonce the transaction will consume
        multisend_address: MultiSendCallOnly deployment to delegate-call

    Returns:
        SafeTransaction with zero gas refund parameters
    """
    if len(batch) == 1:
        tx = batch[0]
        return SafeTransaction(
            to=tx.to,
            value=tx.value,
            data=tx.data,
            operation=OperationType.CALL,
            nonce=nonce,
        )

    return SafeTransaction(
        to=to_checksum_address(multisend_address),
        value=0,
        data=encode_multisend(batch),
        operation=OperationType.DELEGATE_CALL,
        nonce=nonce,
    )
