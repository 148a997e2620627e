"""
Print Result Model
==================

Structured outcome of a print request.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class PrintResult:
    """Print outcome, success or failure."""

    succeeded: bool
    message: str
    details: Optional[str] = None
    captured_output: str = ''

    # Success only
    printer: Optional[str] = None
    file_path: Optional[str] = None
    mechanism: Optional[str] = None

    # Failure only
    error_type: Optional[str] = None
    status_code: int = 200

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON response envelope."""
        if not self.succeeded:
            return {'error': self.message}

        data = {'message': self.message}
        if self.details:
            data['details'] = self.details
        if self.printer:
            data['printer'] = self.printer
        if self.file_path:
            data['file'] = self.file_path
        if self.mechanism:
            data['method'] = self.mechanism
        return data
