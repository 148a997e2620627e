"""
Document Print Service Models
"""

from .job import PrintJobRequest
from .command import ResolvedFile, PrintCommand
from .result import PrintResult

__all__ = ['PrintJobRequest', 'ResolvedFile', 'PrintCommand', 'PrintResult']
