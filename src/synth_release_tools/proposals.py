"""Multisig proposal workflow for synth-release-tools."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from eth_utils import encode_hex, is_same_address, to_checksum_address

from .constants import MULTISEND_CALL_ONLY_ADDRESS
from .exceptions import InvalidSenderError, SignerNotConfiguredError
from .multisend import batch_to_transaction, build_batch
from .paths import get_default_batch_file
from .types import (
    MetaTransaction,
    NonceSource,
    ProposalReceipt,
    ProposalSink,
    QueuedTransaction,
    TransactionSigner,
)

logger = logging.getLogger(__name__)


def propose_transaction(
    safe_address: str,
    batch: List[MetaTransaction],
    nonce_source: NonceSource,
    signer: TransactionSigner,
    sink: ProposalSink,
    multisend_address: str = MULTISEND_CALL_ONLY_ADDRESS,
) -> ProposalReceipt:
    """
    Propose a batch to a Safe for co-signing.

    Drives Drafted -> Hashed -> Signed -> Proposed. Collecting further
    signatures and executing belong to the Safe and its service.

    Args:
        safe_address: Target Safe
        batch: Ordered calls from build_batch
        nonce_source: Provides the next unused Safe nonce (read once, right before building)
        signer: Hashes and signs with the delegate key
        sink: Receives the signed proposal
        multisend_address: MultiSendCallOnly used for multi-call batches

    Returns:
        ProposalReceipt describing the submitted proposal

    Raises:
        SignerNotConfiguredError: If the delegate address can't be resolved
            (raised before any network call)
        SafeServiceError: If nonce lookup or submission fails
    """
    sender = signer.address
    if not sender:
        raise SignerNotConfiguredError("Delegate signer is not set")

    safe_address = to_checksum_address(safe_address)

    nonce = nonce_source.get_next_nonce(safe_address)
    tx = batch_to_transaction(batch, nonce, multisend_address)

    tx_hash = signer.get_transaction_hash(safe_address, tx)
    safe_tx_hash = encode_hex(tx_hash)
    signature = signer.sign_hash(tx_hash)

    sink.propose_transaction(
        safe_address=safe_address,
        tx=tx,
        safe_tx_hash=safe_tx_hash,
        sender=sender,
        signature=signature,
    )

    return ProposalReceipt(
        safe_address=safe_address,
        safe_tx_hash=safe_tx_hash,
        sender=sender,
        signature=signature,
        transaction=tx,
    )


class MultisigBatchQueue:
    """Calls saved during a deployment run, to be proposed later as one batch."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self.path = Path(path) if path is not None else get_default_batch_file()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[QueuedTransaction]:
        """
        Return queued calls in insertion order (empty if nothing is queued).

        Raises:
            ValueError: If the file is not a JSON list of queued calls
        """
        if not self.path.exists():
            return []
        content = self.path.read_text()
        if not content.strip():
            return []

        try:
            items = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in multisig batch file {self.path}: {e}") from e
        if not isinstance(items, list):
            raise ValueError(f"Multisig batch file {self.path} must hold a JSON list")

        queued = []
        for index, item in enumerate(items):
            try:
                queued.append(QueuedTransaction.from_dict(item))
            except ValueError as e:
                raise ValueError(f"Invalid entry #{index} in multisig batch file {self.path}: {e}") from e
        return queued

    def add(self, sender: str, to: Optional[str], data: Optional[str], value: Union[int, str, None] = 0) -> bool:
        """
        Queue a call unless an identical one is already stored.

        Args:
            sender: Account the call must come from (the Safe)
            to: Destination address
            data: ABI-encoded payload
            value: Native value, defaults to 0

        Returns:
            True if the call was added, False if it was already queued

        Raises:
            ValueError: If sender, to or data is missing
        """
        if not sender:
            raise ValueError("The `from` arg can not be null")
        if not to or not data:
            raise ValueError("The `to` and `data` args can not be null")

        entry = QueuedTransaction(sender=sender, to=to, data=data, value=str(value or "0"))
        queued = self.load()
        if entry in queued:
            logger.debug("Call to %s already queued", to)
            return False

        queued.append(entry)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump([q.to_dict() for q in queued], f)

        logger.info("Queued multisig call to %s (%d pending)", to, len(queued))
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


def propose_queued_batch(
    queue: MultisigBatchQueue,
    safe_address: str,
    nonce_source: NonceSource,
    signer: TransactionSigner,
    sink: ProposalSink,
    multisend_address: str = MULTISEND_CALL_ONLY_ADDRESS,
) -> Optional[ProposalReceipt]:
    """
    Propose every queued call as one batch, then clear the queue.

    Args:
        queue: Pending calls
        safe_address: Safe that must be the sender of every queued call

    Returns:
        ProposalReceipt, or None if nothing was queued

    Raises:
        InvalidSenderError: If a queued call is not sent from the Safe
    """
    if not queue.exists():
        return None

    queued = queue.load()
    if not queued:
        queue.clear()
        return None

    for entry in queued:
        if not is_same_address(entry.sender, safe_address):
            raise InvalidSenderError(
                f"Trying to propose a multi-sig transaction but sender ('{entry.sender}') "
                "isn't the safe address."
            )

    batch = build_batch({"to": q.to, "value": q.value, "data": q.data} for q in queued)
    receipt = propose_transaction(safe_address, batch, nonce_source, signer, sink, multisend_address)

    # Only forget the calls once the service has accepted them
    queue.clear()
    return receipt
