"""
Print Service Errors
====================

Exception hierarchy for the print dispatch engine.

    PrintServiceError (base)
    ├── ValidationError     400 - malformed or contradictory request
    ├── NotFoundError       404 - resolved file absent
    ├── DownloadError       500 - remote source could not be fetched
    ├── NoPrinterAvailable  500 - a printer is required but none is installed
    ├── ProcessError        500 - external print program failed
    └── BackendUnavailable  501 - no printing mechanism on this platform

Every error carries the HTTP status it maps to, so the web layer never has
to know which kind it is handling.
"""

from typing import Optional


class PrintServiceError(Exception):
    """Base class for all print service errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, output: str = ''):
        super().__init__(message)
        self.message = message
        self.details = details
        self.output = output

    @property
    def error_type(self) -> str:
        return type(self).__name__


class ValidationError(PrintServiceError):
    status_code = 400


class NotFoundError(PrintServiceError):
    status_code = 404


class DownloadError(PrintServiceError):
    """Network failure, non-2xx status or write failure while downloading."""


class NoPrinterAvailable(PrintServiceError):
    """The printer catalog is empty and the chosen mechanism needs a printer."""


class ProcessError(PrintServiceError):
    """External program exited non-zero, failed to start or timed out."""


class BackendUnavailable(PrintServiceError):
    status_code = 501
