# tests/conftest.py

import pytest

from docprint_service.config import ServiceConfig


@pytest.fixture
def config(tmp_path):
    cfg = ServiceConfig(
        upload_dir=(tmp_path / "uploads").resolve(),
        process_timeout=5,
        download_timeout=5,
        sumatra_path=tmp_path / "SumatraPDF.exe",
    )
    cfg.ensure_upload_dir()
    return cfg


@pytest.fixture
def upload_dir(config):
    return config.upload_dir
