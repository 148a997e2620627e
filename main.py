#!/usr/bin/env python
"""
Document Print Service - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    DOCPRINT_PORT=8081 DOCPRINT_UPLOAD_DIR=./uploads python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    package_dir = os.path.dirname(os.path.abspath(__file__))
    if package_dir not in sys.path:
        sys.path.insert(0, package_dir)

from docprint_service.app import main


if __name__ == '__main__':
    main()
