"""
Print Dispatch Engine
=====================

Validator -> Resolver -> Backend Selector -> Process Executor -> Reporter.

The engine keeps no per-request state; one instance serves all requests.
"""

import logging
from typing import Any, List, Optional

from .config import ServiceConfig
from .errors import PrintServiceError
from .executor import ProcessExecutor
from .models import PrintJobRequest, PrintResult
from .platforms import PlatformStrategy, detect_platform
from .reporter import report_success, report_failure
from .resolver import SourceResolver

logger = logging.getLogger(__name__)


class PrintEngine:
    """Resolves, selects and runs one print command per request."""

    def __init__(self, config: ServiceConfig,
                 platform: Optional[PlatformStrategy] = None,
                 executor: Optional[ProcessExecutor] = None,
                 resolver: Optional[SourceResolver] = None):
        self.config = config
        self.platform = platform or detect_platform(config)
        self.executor = executor or ProcessExecutor(timeout=config.process_timeout)
        self.resolver = resolver or SourceResolver(config)

    def print_document(self, job: PrintJobRequest) -> PrintResult:
        """
        Print a validated job.

        Raises:
            PrintServiceError: any failure, unchanged
        """
        job.validate()
        resolved = self.resolver.resolve(job)
        command = self.platform.select_command(resolved, job.printer_name)
        output = self.executor.run(command)

        result = report_success(resolved, command, self.platform.success_message(command), output)
        logger.info("Printed %s via %s (printer: %s)",
                    resolved.name, command.mechanism, command.printer or 'default')
        return result

    def handle(self, data: Any) -> PrintResult:
        """Decode, print and report; never raises PrintServiceError."""
        try:
            return self.print_document(PrintJobRequest.from_dict(data))
        except PrintServiceError as e:
            logger.warning("Print request failed (%s): %s", e.error_type, e.message)
            return report_failure(e)

    def list_printers(self) -> List[str]:
        """Printer names of the host, rebuilt on every call."""
        return self.platform.list_printers()
