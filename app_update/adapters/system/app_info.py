"""Describe the installed application from its distribution metadata."""

import sys
from importlib import metadata
from typing import Optional

from app_update.domain.model import PackageInfo

_PLATFORMS = {
    "win32": "windows",
    "cygwin": "windows",
    "darwin": "macos",
    "ios": "ios",
    "android": "android",
}


def current_platform() -> str:
    return _PLATFORMS.get(sys.platform, "linux")


def package_info_from_distribution(
    distribution: str,
    build_number: str = "",
    package_name: Optional[str] = None,
    platform: Optional[str] = None,
) -> PackageInfo:
    """Raises importlib.metadata.PackageNotFoundError when the distribution is not installed."""
    return PackageInfo(
        version=metadata.version(distribution),
        build_number=build_number,
        package_name=package_name or distribution,
        platform=platform or current_platform(),
    )
