"""
Print Job Request Model
=======================

The print request as decoded from the JSON body.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..errors import ValidationError


@dataclass(frozen=True)
class PrintJobRequest:
    """Print a previously uploaded file or a remote URL."""

    file_name: Optional[str] = None
    url: Optional[str] = None
    printer_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'PrintJobRequest':
        """Create from the decoded JSON body (camelCase keys)."""
        if not isinstance(data, dict):
            raise ValidationError('Invalid request body')

        values = {}
        for key, attr in (('fileName', 'file_name'), ('url', 'url'), ('printerName', 'printer_name')):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f'{key} must be a string')
            values[attr] = (value.strip() or None) if value else None

        return cls(**values)

    @property
    def is_remote(self) -> bool:
        return bool(self.url)

    def validate(self) -> 'PrintJobRequest':
        """Require exactly one of file_name / url."""
        if bool(self.file_name) == bool(self.url):
            raise ValidationError('fileName and url are mutually exclusive')
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = {'fileName': self.file_name, 'url': self.url, 'printerName': self.printer_name}
        return {k: v for k, v in data.items() if v}
