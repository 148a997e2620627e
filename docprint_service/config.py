"""
Document Print Service Configuration
"""

import os
from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('DOCPRINT_PORT', 8081))
HOST = os.environ.get('DOCPRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('DOCPRINT_DEBUG', 'false').lower() == 'true'

# Multipart upload limit (MB)
MAX_UPLOAD_MB = int(os.environ.get('DOCPRINT_MAX_UPLOAD_MB', 10))

# =============================================================================
# Storage Configuration
# =============================================================================

# Uploaded and downloaded documents live here
UPLOAD_DIR = os.environ.get('DOCPRINT_UPLOAD_DIR', './uploads')

# =============================================================================
# Print Defaults
# =============================================================================

PROCESS_TIMEOUT = int(os.environ.get('DOCPRINT_PROCESS_TIMEOUT', 120))  # seconds
DOWNLOAD_TIMEOUT = int(os.environ.get('DOCPRINT_DOWNLOAD_TIMEOUT', 30))  # seconds

# Bundled silent print helper (Windows)
SUMATRA_PATH = os.environ.get('DOCPRINT_SUMATRA_PATH', 'SumatraPDF.exe')

# File types each Windows mechanism can handle
BROWSER_PRINTABLE_TYPES = ('.pdf', '.png', '.jpg', '.jpeg', '.gif', '.webp', '.bmp')
SILENT_PRINTABLE_TYPES = ('.pdf', '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.tif', '.tiff')

# =============================================================================
# Logging
# =============================================================================

LOG_FILE = os.environ.get('DOCPRINT_LOG_FILE', 'printer.log')
LOG_LEVEL = os.environ.get('DOCPRINT_LOG_LEVEL', 'INFO').upper()


@dataclass(frozen=True)
class ServiceConfig:
    """Settings injected into the print engine."""

    upload_dir: Path
    process_timeout: float = PROCESS_TIMEOUT
    download_timeout: float = DOWNLOAD_TIMEOUT
    sumatra_path: Path = Path(SUMATRA_PATH)

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Build configuration from the module-level environment settings."""
        return cls(
            upload_dir=Path(UPLOAD_DIR).resolve(),
            process_timeout=PROCESS_TIMEOUT,
            download_timeout=DOWNLOAD_TIMEOUT,
            sumatra_path=Path(SUMATRA_PATH).resolve(),
        )

    def ensure_upload_dir(self) -> Path:
        """Create the upload directory if it does not exist yet."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir
