"""
synth-release-tools: release manifests and multisig proposals for synth protocol deployments
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    InvalidReleaseVersionError,
    InvalidSenderError,
    ManifestValidationError,
    ReleaseToolError,
    SafeServiceError,
    SignerNotConfiguredError,
    UnsupportedNetworkError,
)
from .multisend import batch_to_transaction, build_batch
from .parsers import list_deployments
from .proposals import MultisigBatchQueue, propose_queued_batch, propose_transaction
from .releases import create_release, find_previous_release, record_release
from .safe import DelegateSigner, get_safe_tx_hash
from .service import SafeServiceClient
from .store import ReleaseStore
from .types import MetaTransaction, OperationType, ProposalReceipt, ReleaseManifest, SafeTransaction

try:
    __version__ = version("synth-release-tools")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "list_deployments",
    "find_previous_release",
    "record_release",
    "create_release",
    "ReleaseStore",
    "ReleaseManifest",
    "build_batch",
    "batch_to_transaction",
    "get_safe_tx_hash",
    "DelegateSigner",
    "SafeServiceClient",
    "propose_transaction",
    "propose_queued_batch",
    "MultisigBatchQueue",
    "MetaTransaction",
    "OperationType",
    "SafeTransaction",
    "ProposalReceipt",
    "ReleaseToolError",
    "ManifestValidationError",
    "InvalidReleaseVersionError",
    "UnsupportedNetworkError",
    "SignerNotConfiguredError",
    "InvalidSenderError",
    "SafeServiceError",
]
