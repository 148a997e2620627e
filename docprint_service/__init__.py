"""
Document Print Service
======================

Prints uploaded files or remote documents on the host's printers.

Supports:
- Windows (browser print, SumatraPDF silent print, shell print verbs)
- macOS (opens the document for manual printing)

Usage:
    python -m docprint_service

API Endpoints:
    POST /print     - Print {fileName} or {url}, optional {printerName}
    GET  /printers  - List installed printers
    POST /upload    - Upload a document (multipart field 'file')
    GET  /files     - List uploaded documents
    GET  /health    - Health check
"""

__version__ = '1.0.0'
__author__ = 'EGS Software AG'
