"""Path management utilities for synth-release-tools."""

from pathlib import Path
from typing import Optional, Union

from .constants import MULTISIG_BATCH_FILE_NAME, RELEASE_FILE_NAME


def get_default_deployments_dir() -> Path:
    """
    Get default hardhat-deploy records directory.

    Returns:
        Path to ./deployments
    """
    return Path.cwd() / "deployments"


def get_default_releases_dir() -> Path:
    """
    Get default release manifests directory.

    Returns:
        Path to ./releases
    """
    return Path.cwd() / "releases"


def get_default_batch_file() -> Path:
    """Get default pending multisig batch file (./multisig.batch.tmp.json)."""
    return Path.cwd() / MULTISIG_BATCH_FILE_NAME


def get_network_deployments_dir(
    network: str, deployments_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get the directory holding one network's deployment records.

    Args:
        network: Network name, e.g. "mainnet"
        deployments_root: Custom deployments directory (defaults to ./deployments)

    Returns:
        Absolute path to {deployments_root}/{network}
    """
    if deployments_root is None:
        deployments_root = get_default_deployments_dir()
    else:
        deployments_root = Path(deployments_root).absolute()

    return deployments_root / network


def get_release_file(version: str, releases_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the manifest path for a release version.

    Args:
        version: Release version label, e.g. "1.2.3"
        releases_root: Custom releases directory (defaults to ./releases)

    Returns:
        Absolute path to {releases_root}/{version}/contracts.json
    """
    if releases_root is None:
        releases_root = get_default_releases_dir()
    else:
        releases_root = Path(releases_root).absolute()

    return releases_root / version / RELEASE_FILE_NAME
