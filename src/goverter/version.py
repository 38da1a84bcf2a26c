"""Version information printed by the version command."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "goverter-cli"
DEVEL_VERSION = "(devel)"


def version_string() -> str:
    try:
        installed = version(DISTRIBUTION)
    except PackageNotFoundError:
        installed = DEVEL_VERSION
    return f"goverter {installed}"
