"""Release version utilities for synth-release-tools."""

from typing import Iterable, List, Optional

from semver import Version


def is_release_version(name: str) -> bool:
    """
    Check whether a name is a SemVer 2.0.0 label.

    Only the bare MAJOR.MINOR.PATCH form with optional pre-release and
    build parts is accepted: no "v" prefix, no missing components.
    Hidden entries (e.g. .DS_Store left by macOS) are never versions.

    Args:
        name: Directory name or release label

    Returns:
        True if name is a semantic version
    """
    if not name:
        return False
    return Version.is_valid(name)


def filter_release_versions(names: Iterable[str]) -> List[str]:
    """
    Keep only names that are semantic versions, preserving input order.

    Args:
        names: Candidate version labels (e.g. directory listing)

    Returns:
        List of version labels
    """
    return [n for n in names if is_release_version(n)]


def sort_versions(names: Iterable[str]) -> List[str]:
    """
    Sort version labels by SemVer precedence.

    Labels are not zero-padded, so "1.10.0" sorts after "1.2.0", and a
    pre-release sorts before its release ("1.0.0-rc.1" < "1.0.0").
    Non-version names are dropped.

    Args:
        names: Version labels

    Returns:
        Ascending list of version labels
    """
    return sorted(filter_release_versions(names), key=Version.parse)


def latest_version(names: Iterable[str]) -> Optional[str]:
    """Return the highest version label, or None when there is none."""
    versions = sort_versions(names)
    return versions[-1] if versions else None
