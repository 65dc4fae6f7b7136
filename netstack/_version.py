"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Version lookup. A source checkout reads the root VERSION file; an installed
package falls back to its distribution metadata.
"""

from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """Return the Netstack version string, or "unknown"."""
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.is_file():
        return version_file.read_text().strip()
    try:
        return metadata.version("netstack")
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()
