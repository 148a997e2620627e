"""
Unsupported Platform
====================

Used on every OS without a print strategy.
"""

from typing import List, Optional

from .base import PlatformStrategy
from ..errors import BackendUnavailable
from ..models import ResolvedFile, PrintCommand


class UnsupportedPlatform(PlatformStrategy):
    """Rejects every operation with BackendUnavailable."""

    def __init__(self, name: str = 'unknown'):
        self.name = name

    def list_printers(self) -> List[str]:
        raise BackendUnavailable('Listing printers is not supported on this OS')

    def select_command(self, resolved: ResolvedFile, printer_name: Optional[str] = None) -> PrintCommand:
        raise BackendUnavailable('Unsupported operating system')
