"""Release recording for synth-release-tools."""

import copy
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import InvalidReleaseVersionError
from .parsers import list_deployments
from .paths import get_network_deployments_dir
from .store import ReleaseStore
from .types import ReleaseManifest
from .versions import is_release_version

logger = logging.getLogger(__name__)


def _as_store(store: Optional[Union[ReleaseStore, Path, str]]) -> ReleaseStore:
    if isinstance(store, ReleaseStore):
        return store
    return ReleaseStore(store)


def find_previous_release(
    store: Optional[Union[ReleaseStore, Path, str]] = None,
) -> ReleaseManifest:
    """
    Load the manifest of the highest recorded release.

    Args:
        store: ReleaseStore or releases directory (defaults to ./releases)

    Returns:
        Manifest of the latest version, or the empty manifest when there are
        no releases or the latest version directory has no manifest file
    """
    store = _as_store(store)
    latest = store.latest_version()
    if latest is None:
        return ReleaseManifest()
    return store.load(latest)


def record_release(
    version: str,
    network: str,
    deploy_data: Dict[str, str],
    store: Optional[Union[ReleaseStore, Path, str]] = None,
) -> Path:
    """
    Record a network's deployed addresses into a release manifest.

    Re-running for the latest version updates it in place. A new version
    starts as a copy of the latest prior release. The network's table is
    replaced wholesale by deploy_data: contracts absent from this run are
    dropped for that network only.

    Args:
        version: Release semantic version, e.g. "1.2.3"
        network: Network name
        deploy_data: Contract name -> address for this network
        store: ReleaseStore or releases directory (defaults to ./releases)

    Returns:
        Path of the written manifest

    Raises:
        InvalidReleaseVersionError: If version is not a semantic version
    """
    if not is_release_version(version):
        raise InvalidReleaseVersionError(f"Release '{version}' is not a semantic version")

    store = _as_store(store)
    previous = find_previous_release(store)

    if previous.version == version:
        release = previous
    else:
        (store.releases_dir / version).mkdir(parents=True, exist_ok=True)
        release = ReleaseManifest(version=version, networks=copy.deepcopy(previous.networks))
        if previous.version is not None:
            logger.info("Starting release %s from release %s", version, previous.version)

    release.networks.setdefault(network, {})
    release.networks[network] = dict(deploy_data)

    return store.save(release)


def create_release(
    version: str,
    network: str,
    deployments_dir: Optional[Union[Path, str]] = None,
    releases_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Scan a network's deployment records and record them into a release.

    Args:
        version: Release semantic version
        network: Network whose records are read from {deployments_dir}/{network}
        deployments_dir: Deployment records root (defaults to ./deployments)
        releases_dir: Releases root (defaults to ./releases)

    Returns:
        Path of the written manifest
    """
    network_dir = get_network_deployments_dir(network, deployments_dir)
    deploy_data = list_deployments(network_dir)
    logger.info("Found %d deployed contracts for %s in %s", len(deploy_data), network, network_dir)
    return record_release(version, network, deploy_data, ReleaseStore(releases_dir))
