"""
macOS Platform
==============

No programmatic print dispatch: the document is opened in its default
application and the user confirms printing there.
"""

import logging
from typing import List, Optional

from .base import PlatformStrategy
from ..errors import BackendUnavailable
from ..models import ResolvedFile, PrintCommand

logger = logging.getLogger(__name__)


class MacOSPlatform(PlatformStrategy):
    """macOS strategy: `open` with the associated application."""

    name = 'darwin'

    def __init__(self, open_command: str = 'open'):
        self.open_command = open_command

    def list_printers(self) -> List[str]:
        raise BackendUnavailable('Listing printers is not supported on this OS')

    def select_command(self, resolved: ResolvedFile, printer_name: Optional[str] = None) -> PrintCommand:
        if printer_name:
            logger.info("Printer '%s' ignored on macOS; printing is confirmed manually", printer_name)
        return PrintCommand(self.open_command, (str(resolved.absolute_path),), mechanism='open')

    def success_message(self, command: PrintCommand) -> str:
        return 'File opened with the default application. Confirm printing manually.'
