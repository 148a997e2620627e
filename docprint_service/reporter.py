"""
Result Reporter
===============

Maps print outcomes and errors to PrintResult.
"""

from .errors import PrintServiceError
from .models import PrintCommand, PrintResult, ResolvedFile


def report_success(resolved: ResolvedFile, command: PrintCommand, message: str, output: str = '') -> PrintResult:
    """Result for a command that ran successfully."""
    file_path = str(resolved.absolute_path)
    return PrintResult(
        succeeded=True,
        message=message,
        details=(
            f'File: {file_path}, Printer: {command.printer or "default"}, '
            f'Method: {command.mechanism or "print"} ({command.program})'
        ),
        captured_output=output,
        printer=command.printer,
        file_path=file_path,
        mechanism=command.mechanism,
    )


def report_failure(error: PrintServiceError) -> PrintResult:
    """Result for an error raised anywhere in the engine; kind is preserved."""
    return PrintResult(
        succeeded=False,
        message=error.message,
        details=error.details,
        captured_output=error.output,
        error_type=error.error_type,
        status_code=error.status_code,
    )
