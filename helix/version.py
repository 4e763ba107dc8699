# helix/version.py
"""
helix Version Information

Version number, package metadata and release history for the helix package,
available programmatically via helix.__version__.

Versions follow semantic versioning (MAJOR.MINOR.PATCH).
"""

from typing import Any, Dict, List, Optional, Tuple

# Version components
VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_PATCH = 0

# Full version string
__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

# Package metadata
__title__ = "helix"
__description__ = "Minimum-phase filters on a helix with Wilson-Burg spectral factorization"
__license__ = "MIT"

# Python version requirements
__python_requires__ = ">=3.10"

# Package dependencies
__dependencies__ = {
    "numpy": ">=1.26.0",
    "scipy": ">=1.11.3",
    "numba": ">=0.58.0"
}

# Release history, newest first
VERSION_HISTORY = [
    {
        "version": "1.0.0",
        "release_date": "2026-10-17",
        "changes": [
            "Minimum-phase filters on 1-D, 2-D and 3-D arrays via helix lag tables",
            "Apply, transpose, inverse and inverse transpose in one Numba kernel",
            "Wilson-Burg spectral factorization for 1-D and 2-D lag tables",
            "Configurable convergence tolerance, iteration cap and buffer padding"
        ]
    }
]


def get_version_info() -> Dict[str, Any]:
    """
    Get detailed version information about the helix package.

    Returns:
        Dict containing the version string, its components, the release date
        and changes of the current release, and dependency requirements.
    """
    current_version = VERSION_HISTORY[0]

    return {
        "version": __version__,
        "major": VERSION_MAJOR,
        "minor": VERSION_MINOR,
        "patch": VERSION_PATCH,
        "release_date": current_version["release_date"],
        "changes": current_version["changes"],
        "python_requires": __python_requires__,
        "dependencies": __dependencies__,
        "license": __license__
    }


def get_version_components() -> Tuple[int, int, int]:
    """Return (major, minor, patch)."""
    return (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)


def is_compatible_with(version: str) -> bool:
    """
    Check whether this release satisfies a required version.

    Compatible means the same major version and an equal or newer
    minor/patch. Unparseable version strings are treated as incompatible.
    """
    try:
        parts = version.split(".")
        major = int(parts[0])
        minor = int(parts[1] if len(parts) > 1 else 0)
        patch = int(parts[2] if len(parts) > 2 else 0)
    except (ValueError, IndexError):
        return False

    if VERSION_MAJOR != major:
        return False
    return (VERSION_MINOR, VERSION_PATCH) >= (minor, patch)


def get_release_notes(version: Optional[str] = None) -> Dict[str, Any]:
    """
    Get release notes for a version (default: the current one).

    Raises:
        ValueError: If the version is not in the release history
    """
    if version is None:
        version = __version__

    for release in VERSION_HISTORY:
        if release["version"] == version:
            return dict(release)

    raise ValueError(f"Version {version} not found in version history")


def list_all_versions() -> List[str]:
    """List all released version strings, newest first."""
    return [release["version"] for release in VERSION_HISTORY]
