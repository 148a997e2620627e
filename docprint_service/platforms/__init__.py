"""
Document Print Service Platforms
================================

Print strategies for different host operating systems.
"""

import sys
from typing import Optional

from ..config import ServiceConfig
from .base import PlatformStrategy
from .windows import WindowsPlatform
from .macos import MacOSPlatform
from .unsupported import UnsupportedPlatform

__all__ = ['PlatformStrategy', 'WindowsPlatform', 'MacOSPlatform', 'UnsupportedPlatform',
           'get_platform', 'detect_platform']

# Platform registry, keyed by sys.platform
PLATFORMS = {
    'win32': WindowsPlatform,
    'darwin': MacOSPlatform,
}


def get_platform(platform_name: str) -> Optional[type]:
    """Get platform strategy class by sys.platform value."""
    return PLATFORMS.get(platform_name)


def detect_platform(config: Optional[ServiceConfig] = None,
                    platform_name: Optional[str] = None) -> PlatformStrategy:
    """Instantiate the strategy for the host (or the named) platform."""
    platform_name = platform_name or sys.platform
    strategy_class = get_platform(platform_name)

    if strategy_class is WindowsPlatform:
        return WindowsPlatform(sumatra_path=config.sumatra_path if config else None)
    if strategy_class is None:
        return UnsupportedPlatform(platform_name)
    return strategy_class()
