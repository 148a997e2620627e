"""
Resolved File & Print Command Models
====================================

Short-lived values passed from the resolver to the selector and executor.
"""

import ntpath
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, List


@dataclass(frozen=True)
class ResolvedFile:
    """Concrete local file handed to the printing mechanism."""

    absolute_path: Path
    extension: str  # lowercased, with leading dot

    @classmethod
    def from_path(cls, path: Path) -> 'ResolvedFile':
        return cls(absolute_path=path, extension=path.suffix.lower())

    @property
    def name(self) -> str:
        return self.absolute_path.name


@dataclass(frozen=True)
class PrintCommand:
    """External program invocation chosen by a platform strategy."""

    executable: str
    arguments: Tuple[str, ...] = ()

    # Which mechanism built it (browser, silent, shell, open)
    mechanism: str = ''
    printer: Optional[str] = None

    # Blocks until the spooler has taken the job
    wait: bool = False

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.arguments]

    @property
    def program(self) -> str:
        """Executable name without its directory (Windows or POSIX path)."""
        return ntpath.basename(self.executable)

    def describe(self) -> str:
        return ' '.join(self.argv)
