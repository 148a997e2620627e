"""
Document Print Service Client
=============================

Python SDK for interacting with the Document Print Service.

Usage:
    from docprint_service.client import PrintClient

    client = PrintClient('http://localhost:8081')

    # Upload and print a local document
    with open('report.pdf', 'rb') as f:
        uploaded = client.upload('report.pdf', f)
    result = client.print_file(uploaded['file']['path'], printer_name='HP LaserJet')

    # Print a remote document
    result = client.print_url('https://example.com/invoice.pdf')
"""

import requests
from typing import Dict, Any, Optional, List, BinaryIO


class PrintClient:
    """Client for the Document Print Service."""

    def __init__(self, base_url: str = 'http://localhost:8081', timeout: float = 30,
                 session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            base_url: Base URL of the print service
            timeout: Request timeout in seconds (printing waits for the spooler)
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make API request; transport failures come back as an error envelope."""
        url = f'{self.base_url}{endpoint}'
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
            return response.json()

        except requests.exceptions.Timeout:
            return {'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'error': f'Cannot connect to {self.base_url}'}
        except ValueError:
            return {'error': f'Invalid response from {url}'}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> List[str]:
        """List printer names installed on the service host (empty if unsupported)."""
        result = self._request('GET', '/printers')
        return result if isinstance(result, list) else []

    # =========================================================================
    # Printing
    # =========================================================================

    def print_file(self, file_name: str, printer_name: Optional[str] = None) -> Dict[str, Any]:
        """
        Print a previously uploaded file.

        Args:
            file_name: Name returned by upload() (path inside the upload directory)
            printer_name: Target printer (default printer when omitted)
        """
        data = {'fileName': file_name}
        if printer_name:
            data['printerName'] = printer_name
        return self._request('POST', '/print', json=data)

    def print_url(self, url: str, printer_name: Optional[str] = None) -> Dict[str, Any]:
        """Have the service download url and print it."""
        data = {'url': url}
        if printer_name:
            data['printerName'] = printer_name
        return self._request('POST', '/print', json=data)

    # =========================================================================
    # Files
    # =========================================================================

    def upload(self, file_name: str, stream: BinaryIO) -> Dict[str, Any]:
        """Upload a document; the response holds the stored name under file.path."""
        return self._request('POST', '/upload', files={'file': (file_name, stream)})

    def list_files(self) -> List[Dict[str, str]]:
        """List uploaded documents."""
        result = self._request('GET', '/files')
        return result if isinstance(result, list) else []
