"""
Source Resolver
===============

Turns a validated print request into a concrete local file inside the
upload directory, downloading it first when the request names a URL.
"""

import logging
import os
import re
import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional
from urllib.parse import urlsplit, unquote

import requests

from .config import ServiceConfig
from .errors import ValidationError, NotFoundError, DownloadError
from .models import PrintJobRequest, ResolvedFile

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = '.dat'
CHUNK_SIZE = 64 * 1024

_EXTENSION_RE = re.compile(r'^\.[A-Za-z0-9]{1,16}$')


def generate_file_name(extension: str) -> str:
    """Random 32-hex-character name with the given extension."""
    return f'{uuid.uuid4().hex}{extension}'


def extension_from_name(name: Optional[str]) -> str:
    """Lowercased extension of a file or URL path, '.dat' when unusable."""
    if not name:
        return DEFAULT_EXTENSION
    ext = os.path.splitext(PurePosixPath(name).name)[1].lower()
    if not _EXTENSION_RE.match(ext):
        return DEFAULT_EXTENSION
    return ext


def extension_from_url(url: str) -> str:
    """Extension taken from the URL path only; query and fragment are ignored."""
    return extension_from_name(unquote(urlsplit(url).path))


class SourceResolver:
    """Resolve local file names and remote URLs to files in the upload directory."""

    def __init__(self, config: ServiceConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def upload_dir(self) -> Path:
        return Path(self.config.upload_dir).resolve()

    def resolve(self, job: PrintJobRequest) -> ResolvedFile:
        """
        Resolve a validated request to a local file.

        Raises:
            ValidationError: file name escapes the upload directory, bad URL
            DownloadError: remote source could not be fetched
            NotFoundError: the resulting file does not exist
        """
        if job.is_remote:
            path = self.download(job.url)
        else:
            path = self.local_path(job.file_name)

        if not path.is_file():
            logger.warning("File does not exist: %s", path)
            raise NotFoundError('File not found', details=str(path))

        return ResolvedFile.from_path(path)

    def local_path(self, file_name: str) -> Path:
        """Absolute path of an uploaded file, contained in the upload directory."""
        base = self.upload_dir
        try:
            candidate = (base / file_name).resolve()
        except (OSError, ValueError) as e:
            raise ValidationError(f'Invalid fileName: {e}') from e

        if candidate == base or not candidate.is_relative_to(base):
            logger.warning("Rejected file name outside upload directory: %r", file_name)
            raise ValidationError('fileName must refer to a file inside the upload directory')

        return candidate

    def download(self, url: str) -> Path:
        """Download url into the upload directory under a generated name."""
        scheme = urlsplit(url).scheme.lower()
        if scheme not in ('http', 'https'):
            raise ValidationError('url must be an http or https URL')

        target = self.upload_dir / generate_file_name(extension_from_url(url))
        logger.info("Downloading %s to %s", url, target)

        try:
            with self.session.get(url, stream=True, timeout=self.config.download_timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise DownloadError(
                        'Failed to download file from URL',
                        details=f'bad status: {response.status_code} {response.reason or ""}'.strip(),
                    )
                self._write_stream(response.iter_content(chunk_size=CHUNK_SIZE), target)

        except FileExistsError as e:
            logger.error("Refusing to overwrite existing file %s", target)
            raise DownloadError('Failed to save downloaded file', details=str(e)) from e
        except requests.exceptions.RequestException as e:
            self._discard(target)
            logger.error("Failed to download %s: %s", url, e)
            raise DownloadError('Failed to download file from URL', details=str(e)) from e
        except OSError as e:
            self._discard(target)
            logger.error("Failed to write download %s: %s", target, e)
            raise DownloadError('Failed to save downloaded file', details=str(e)) from e
        except DownloadError:
            self._discard(target)
            raise

        logger.info("Downloaded %s (%d bytes)", target.name, target.stat().st_size)
        return target

    def store_upload(self, stream: BinaryIO, original_name: Optional[str]) -> Path:
        """Save an uploaded file stream under a generated name."""
        target = self.upload_dir / generate_file_name(extension_from_name(original_name))
        try:
            self._write_stream(iter(lambda: stream.read(CHUNK_SIZE), b''), target)
        except FileExistsError:
            logger.error("Refusing to overwrite existing file %s", target)
            raise
        except OSError:
            self._discard(target)
            raise
        logger.info("Stored upload %r as %s", original_name, target.name)
        return target

    def list_files(self) -> list:
        """Files in the upload directory as {name, path} entries."""
        base = self.upload_dir
        if not base.is_dir():
            return []
        return [
            {'name': p.name, 'path': p.relative_to(base).as_posix()}
            for p in sorted(base.rglob('*'))
            if p.is_file()
        ]

    @staticmethod
    def _write_stream(chunks, target: Path):
        target.parent.mkdir(parents=True, exist_ok=True)
        # 'xb' never overwrites an existing file
        with open(target, 'xb') as f:
            for chunk in chunks:
                if chunk:
                    f.write(chunk)

    @staticmethod
    def _discard(path: Path):
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove partial file %s: %s", path, e)
