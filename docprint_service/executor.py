"""
Process Executor
================

Runs one external print program per command, synchronously, and captures
its combined stdout/stderr.
"""

import locale
import logging
import subprocess
from typing import Optional

from .config import PROCESS_TIMEOUT
from .errors import ProcessError
from .models import PrintCommand

logger = logging.getLogger(__name__)


def _decode(output: Optional[bytes]) -> str:
    if not output:
        return ''
    if isinstance(output, str):
        return output
    # Windows consoles do not emit UTF-8 by default
    return output.decode(locale.getpreferredencoding(False) or 'utf-8', errors='replace')


class ProcessExecutor:
    """
    Spawn the chosen print program and wait for it.

    The child is killed when it runs longer than `timeout` seconds; there is
    no other way to cancel a dispatched command.
    """

    def __init__(self, timeout: Optional[float] = PROCESS_TIMEOUT):
        self.timeout = timeout

    def run(self, command: PrintCommand) -> str:
        """
        Run command and return its combined output.

        Raises:
            ProcessError: non-zero exit, spawn failure or timeout
        """
        logger.info("Running %s command: %s", command.mechanism or 'print', command.describe())

        try:
            completed = subprocess.run(
                command.argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            output = _decode(e.output)
            logger.error("Print command timed out after %s seconds: %s", self.timeout, command.describe())
            raise ProcessError(
                f'Printing failed: command timed out after {self.timeout} seconds',
                details=command.describe(),
                output=output,
            ) from e
        except OSError as e:
            logger.error("Print command failed to start: %s", e)
            raise ProcessError(f'Printing failed: {e}', details=command.describe()) from e

        output = _decode(completed.stdout)
        if completed.returncode != 0:
            logger.error("Print command failed: exit status %d", completed.returncode)
            logger.error("Command output: %s", output)
            raise ProcessError(
                f'Printing failed: exit status {completed.returncode}\nOutput: {output}',
                details=command.describe(),
                output=output,
            )

        logger.info("Print command sent successfully. Output: %s", output.strip())
        return output
