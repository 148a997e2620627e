"""
Base Platform
=============

Abstract base class for per-OS printing strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import ResolvedFile, PrintCommand


class PlatformStrategy(ABC):
    """Printer enumeration and print-mechanism selection for one OS."""

    name = 'unknown'

    @abstractmethod
    def list_printers(self) -> List[str]:
        """
        Enumerate printers installed on the host.

        Returns:
            Ordered, unique printer names (possibly empty)

        Raises:
            BackendUnavailable: enumeration is not supported on this OS
        """
        pass

    @abstractmethod
    def select_command(self, resolved: ResolvedFile, printer_name: Optional[str] = None) -> PrintCommand:
        """
        Choose the command that prints resolved.

        Args:
            resolved: File to print
            printer_name: Printer requested by the caller, if any

        Returns:
            The first applicable command of this platform's fallback chain

        Raises:
            BackendUnavailable: no mechanism applies
            NoPrinterAvailable: the chosen mechanism needs a printer and none exists
        """
        pass

    def success_message(self, command: PrintCommand) -> str:
        """Message reported after command ran successfully."""
        return 'Print job sent to the specified printer.'
