"""
Document Print Service - Main Application
=========================================

Prints uploaded files or remote URLs on the host's printers.

Run: python -m docprint_service
"""

import logging
import platform
import socket
import sys
from datetime import datetime
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import __version__
from .config import MAX_UPLOAD_MB, ServiceConfig
from .engine import PrintEngine
from .errors import PrintServiceError, ValidationError
from .reporter import report_failure

logger = logging.getLogger(__name__)

# =============================================================================
# Application Setup
# =============================================================================


def create_app(config: Optional[ServiceConfig] = None, engine: Optional[PrintEngine] = None) -> Flask:
    """Build the Flask app around a print engine."""
    config = config or (engine.config if engine else ServiceConfig.from_env())
    config.ensure_upload_dir()
    engine = engine or PrintEngine(config)

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_MB * 1024 * 1024
    app.extensions['print_engine'] = engine
    CORS(app)

    _register_error_handlers(app)
    _register_routes(app, engine)
    return app


def _error_response(message: str, status_code: int):
    return jsonify({'error': message}), status_code


def _register_error_handlers(app: Flask):

    @app.errorhandler(PrintServiceError)
    def handle_print_error(error):
        result = report_failure(error)
        return jsonify(result.to_dict()), result.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return _error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return _error_response('Internal server error', 500)


def _register_routes(app: Flask, engine: PrintEngine):

    # =========================================================================
    # Info & Health
    # =========================================================================

    @app.route('/', methods=['GET'])
    @app.route('/api', methods=['GET'])
    def api_info():
        """API info (JSON)."""
        return jsonify({
            'service': 'Document Print Service',
            'version': __version__,
            'status': 'running',
            'endpoints': {
                'health': '/health',
                'print': '/print',
                'printers': '/printers',
                'upload': '/upload',
                'files': '/files',
            }
        })

    @app.route('/health', methods=['GET'])
    def health():
        """Health check with system info."""
        return jsonify({
            'status': 'online',
            'version': __version__,
            'hostname': socket.gethostname(),
            'platform': platform.system(),
            'print_backend': engine.platform.name,
            'python': sys.version.split()[0],
            'upload_dir': str(engine.config.upload_dir),
            'timestamp': datetime.now().isoformat(),
        })

    # =========================================================================
    # Printing
    # =========================================================================

    @app.route('/print', methods=['POST'])
    def print_document():
        """Print an uploaded file (fileName) or a remote document (url)."""
        data = request.get_json(force=True, silent=True)
        if data is None:
            raise ValidationError('Invalid request body')

        result = engine.handle(data)
        return jsonify(result.to_dict()), result.status_code

    @app.route('/printers', methods=['GET'])
    def list_printers():
        """List printers installed on the host."""
        return jsonify(engine.list_printers())

    # =========================================================================
    # Files
    # =========================================================================

    @app.route('/upload', methods=['POST'])
    def upload_file():
        """Store a multipart upload (field 'file') under a generated name."""
        upload = request.files.get('file')
        if upload is None or not upload.filename:
            raise ValidationError('Could not retrieve file from form-data')

        try:
            path = engine.resolver.store_upload(upload.stream, upload.filename)
        except OSError as e:
            logger.error("Could not save uploaded file %r: %s", upload.filename, e)
            return _error_response('Could not save uploaded file', 500)

        return jsonify({
            'message': 'File uploaded successfully',
            'file': {'name': upload.filename, 'path': path.name},
        })

    @app.route('/files', methods=['GET'])
    def list_files():
        """List files in the upload directory."""
        try:
            return jsonify(engine.resolver.list_files())
        except OSError as e:
            logger.error("Failed to list files: %s", e)
            return _error_response('Could not list files', 500)


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    from .config import PORT, HOST, DEBUG, LOG_FILE, LOG_LEVEL
    from .logging_config import setup_logging

    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE or None)
    logger.info("Application starting - OS: %s, Arch: %s", sys.platform, platform.machine())

    config = ServiceConfig.from_env()
    app = create_app(config)
    engine = app.extensions['print_engine']

    logger.info("Document Print Service %s", __version__)
    logger.info("Print backend: %s", engine.platform.name)
    logger.info("Upload directory: %s", config.upload_dir)
    logger.info("Process timeout: %ss", config.process_timeout)
    logger.info("Server starting on http://%s:%s", HOST, PORT)

    app.run(host=HOST, port=PORT, debug=DEBUG, threaded=True)


if __name__ == '__main__':
    main()
