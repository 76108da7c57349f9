"""Release manifest storage for synth-release-tools."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import ManifestValidationError
from .paths import get_default_releases_dir, get_release_file
from .types import ReleaseManifest
from .versions import latest_version, sort_versions

logger = logging.getLogger(__name__)


class ReleaseStore:
    """Loads and saves release manifests under releases/<version>/contracts.json."""

    def __init__(self, releases_dir: Optional[Union[Path, str]] = None):
        """
        Args:
            releases_dir: Root of the release directories (defaults to ./releases)
        """
        if releases_dir is None:
            releases_dir = get_default_releases_dir()
        self.releases_dir = Path(releases_dir)

    def manifest_path(self, version: str) -> Path:
        return get_release_file(version, self.releases_dir)

    def exists(self, version: str) -> bool:
        return self.manifest_path(version).exists()

    def versions(self) -> List[str]:
        """
        List recorded release versions in semantic-version order.

        Only directories named as versions count; stray files and hidden
        entries are ignored. A missing releases directory has no versions.
        """
        if not self.releases_dir.is_dir():
            return []
        names = [p.name for p in self.releases_dir.iterdir() if p.is_dir()]
        return sort_versions(names)

    def latest_version(self) -> Optional[str]:
        return latest_version(self.versions())

    def load(self, version: str) -> ReleaseManifest:
        """
        Load the manifest of a version.

        Args:
            version: Release version label

        Returns:
            ReleaseManifest, empty if the version has no manifest file

        Raises:
            ManifestValidationError: If the file is not valid manifest JSON
        """
        path = self.manifest_path(version)
        if not path.exists():
            return ReleaseManifest()

        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestValidationError(f"Invalid JSON in release manifest {path}: {e}") from e

        return ReleaseManifest.from_dict(data)

    def save(self, manifest: ReleaseManifest) -> Path:
        """
        Write a manifest to its version directory.

        Creates parent directories if they don't exist.

        Returns:
            Path of the written manifest
        """
        if manifest.version is None:
            raise ManifestValidationError("Cannot save a release manifest without a version")

        path = self.manifest_path(manifest.version)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(manifest.to_dict(), f, indent=2)
            f.write("\n")

        logger.info("Wrote release manifest %s", path)
        return path
