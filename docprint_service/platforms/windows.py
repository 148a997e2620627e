"""
Windows Platform
================

Prints through the Windows shell and installed applications.

Fallback chain, first applicable wins:
    1. Browser print      - Edge/Chrome/Firefox for PDFs and images
    2. Silent print util  - bundled SumatraPDF for PDFs and images
    3. Shell print verb   - PowerShell Start-Process -Verb Print/PrintTo

Printers are enumerated with pywin32 (win32print), falling back to parsing
`wmic printer get name /format:csv` when pywin32 is missing or fails.
"""

import logging
import ntpath
import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional

from .base import PlatformStrategy
from ..config import BROWSER_PRINTABLE_TYPES, SILENT_PRINTABLE_TYPES, SUMATRA_PATH
from ..errors import NoPrinterAvailable
from ..models import ResolvedFile, PrintCommand

logger = logging.getLogger(__name__)

# Probed in priority order
BROWSERS = (
    ('msedge.exe', ('Microsoft', 'Edge', 'Application')),
    ('chrome.exe', ('Google', 'Chrome', 'Application')),
    ('firefox.exe', ('Mozilla Firefox',)),
)

INSTALL_ROOTS = ('ProgramFiles', 'ProgramFiles(x86)', 'LOCALAPPDATA')

WMIC_COMMAND = ['wmic', 'printer', 'get', 'name', '/format:csv']
INVENTORY_TIMEOUT = 30  # seconds


def parse_printer_csv(output: str) -> List[str]:
    """
    Extract printer names from wmic CSV/table output.

    CSV output starts with a `Node,Name` header and lines look like
    `NODE,Printer Name`; printer names may themselves contain commas, so only
    the first comma separates the node column. Table output (`Name` header)
    has no node column and each line is a whole name.
    """
    names = []
    has_node_column = False
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        header = [field.strip().lower() for field in line.split(',')]
        if header == ['node', 'name']:
            has_node_column = True
            continue
        if header == ['name']:
            has_node_column = False
            continue
        name = line.split(',', 1)[-1].strip() if has_node_column else line
        if name:
            names.append(name)
    return _unique(names)


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for name in names:
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def _ps_quote(value: str) -> str:
    """Single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"


class WindowsPlatform(PlatformStrategy):
    """Windows print strategy."""

    name = 'windows'

    def __init__(self, sumatra_path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 exists: Callable[[str], bool] = os.path.isfile):
        """
        Args:
            sumatra_path: Location of the silent print helper
            environ: Environment holding the install roots (default os.environ)
            exists: File probe used to locate browsers and the helper
        """
        self.sumatra_path = Path(sumatra_path or SUMATRA_PATH)
        self.environ = os.environ if environ is None else environ
        self.exists = exists

    # =========================================================================
    # Printer Catalog
    # =========================================================================

    def list_printers(self) -> List[str]:
        try:
            return self._native_printers()
        except ImportError:
            logger.info("pywin32 not installed, falling back to wmic printer inventory")
        except Exception as e:
            logger.warning("Native printer enumeration failed: %s", e)

        try:
            return self._inventory_printers()
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("wmic printer inventory failed: %s", e)
        return []

    def _native_printers(self) -> List[str]:
        import win32print

        printers = win32print.EnumPrinters(
            win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
        )
        names = [p[2] for p in printers]

        try:
            default = win32print.GetDefaultPrinter()
        except Exception as e:
            logger.info("No default printer configured: %s", e)
            default = None

        if default:
            names = [default] + [n for n in names if n != default]
        return _unique(names)

    def _inventory_printers(self) -> List[str]:
        completed = subprocess.run(
            WMIC_COMMAND,
            capture_output=True,
            text=True,
            timeout=INVENTORY_TIMEOUT,
        )
        if completed.returncode != 0:
            raise subprocess.SubprocessError(
                f'wmic exited with status {completed.returncode}: {completed.stderr.strip()}'
            )
        return parse_printer_csv(completed.stdout)

    def default_printer(self) -> Optional[str]:
        """First catalog entry, or None when no printer is installed."""
        printers = self.list_printers()
        if not printers:
            logger.warning("Could not get default printer. Proceeding without a specific printer.")
            return None
        return printers[0]

    # =========================================================================
    # Backend Selection
    # =========================================================================

    def find_browser(self) -> Optional[str]:
        """Locate an installed browser executable, Edge first."""
        for executable, sub_path in BROWSERS:
            for root_var in INSTALL_ROOTS:
                root = self.environ.get(root_var)
                if not root:
                    continue
                browser_path = ntpath.join(root, *sub_path, executable)
                if self.exists(browser_path):
                    logger.info("Found browser: %s", browser_path)
                    return browser_path

        logger.info("No supported browser found on the system.")
        return None

    def select_command(self, resolved: ResolvedFile, printer_name: Optional[str] = None) -> PrintCommand:
        explicit = bool(printer_name)
        printer = printer_name or self.default_printer()

        command = self._browser_command(resolved, printer)
        if command is None:
            command = self._silent_command(resolved, printer)
        if command is None:
            command = self._shell_command(resolved, printer, explicit)
        return command

    def _browser_command(self, resolved: ResolvedFile, printer: Optional[str]) -> Optional[PrintCommand]:
        if resolved.extension not in BROWSER_PRINTABLE_TYPES:
            return None

        browser_path = self.find_browser()
        if not browser_path:
            return None

        file_path = str(resolved.absolute_path)
        logger.info("Attempting to print file '%s' using browser '%s'", file_path, browser_path)

        if ntpath.basename(browser_path).lower() == 'firefox.exe':
            args = ['-print', file_path]
            if printer:
                args += ['-print-to', printer]
        else:
            # Chromium family (Edge, Chrome)
            args = ['--kiosk-printing']
            if printer:
                args.append(f'--print-to="{printer}"')
            args.append(file_path)

        return PrintCommand(browser_path, tuple(args), mechanism='browser', printer=printer)

    def _silent_command(self, resolved: ResolvedFile, printer: Optional[str]) -> Optional[PrintCommand]:
        if resolved.extension not in SILENT_PRINTABLE_TYPES:
            return None
        if not self.exists(str(self.sumatra_path)):
            logger.info("Silent print helper not found at %s", self.sumatra_path)
            return None

        file_path = str(resolved.absolute_path)
        if printer:
            args = ('-print-to', printer, file_path, '-silent')
        else:
            args = ('-print-to-default', file_path, '-silent')

        logger.info("Attempting to print file '%s' silently via %s", file_path, self.sumatra_path.name)
        return PrintCommand(str(self.sumatra_path), args, mechanism='silent', printer=printer)

    def _shell_command(self, resolved: ResolvedFile, printer: Optional[str], explicit: bool) -> PrintCommand:
        if not printer:
            raise NoPrinterAvailable('Could not get default printer. Please specify a printer.')

        file_path = _ps_quote(str(resolved.absolute_path))
        if explicit:
            logger.info("Attempting to print file %s on printer '%s' via PowerShell...", file_path, printer)
            target = _ps_quote(f'"{printer}"')
            ps_command = (
                f'Start-Process -FilePath {file_path} -Verb PrintTo '
                f'-ArgumentList {target} '
                f'-WindowStyle Hidden -PassThru | Wait-Process'
            )
        else:
            logger.info("Attempting to print file %s using default system method via PowerShell...", file_path)
            ps_command = f'Start-Process -FilePath {file_path} -Verb Print -WindowStyle Hidden'

        return PrintCommand(
            'powershell',
            ('-NoProfile', '-NonInteractive', '-Command', ps_command),
            mechanism='shell',
            printer=printer,
            wait=explicit,
        )
