"""
Version helpers for the vrfduel package.

The installed distribution's metadata wins; a source checkout that was never
installed reports BASE_VERSION with a local dev marker. All returned versions
are PEP 440.
"""
from __future__ import annotations

import sys
from functools import lru_cache
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Bump this when making intentional, source-level releases.
BASE_VERSION = "0.1.0"

_PKG_NAME = "vrfduel"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return _pkg_version(_PKG_NAME)
    except PackageNotFoundError:
        pass

    py = f".py{sys.version_info.major}{sys.version_info.minor}"
    return f"{BASE_VERSION}+src{py}"


__version__ = get_version()
__all__ = ["__version__", "get_version", "BASE_VERSION"]
