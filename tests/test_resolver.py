# tests/test_resolver.py

import io
import re
import threading

import pytest
import requests

from docprint_service.errors import DownloadError, NotFoundError, ValidationError
from docprint_service.models import PrintJobRequest
from docprint_service.resolver import SourceResolver, extension_from_url, extension_from_name
from tests.fakes.fake_http import FakeResponse, FakeSession
from tests.helpers import write_upload

GENERATED_NAME = re.compile(r"^[0-9a-f]{32}\.[a-z0-9]+$")


def _files(directory):
    return sorted(p.name for p in directory.iterdir())


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://host/pic.png", ".png"),
        ("http://host/docs/Report.PDF", ".pdf"),
        ("http://host/pic.jpeg?size=large#top", ".jpeg"),
        ("http://host/download", ".dat"),
        ("http://host/", ".dat"),
        ("http://host/archive.v2/file", ".dat"),
        ("http://host/name%20with%20space.docx", ".docx"),
    ],
)
def test_extension_from_url(url, expected):
    assert extension_from_url(url) == expected


def test_extension_from_name_rejects_unusable_suffixes():
    assert extension_from_name(None) == ".dat"
    assert extension_from_name("notes") == ".dat"
    assert extension_from_name("weird.p\\df") == ".dat"
    assert extension_from_name("Letter.TXT") == ".txt"


# ---------------------------------------------------------------------------
# Local branch
# ---------------------------------------------------------------------------

def test_resolve_local_file(config, upload_dir):
    path = write_upload(upload_dir, "report.pdf")

    resolved = SourceResolver(config, session=FakeSession()).resolve(PrintJobRequest(file_name="report.pdf"))

    assert resolved.absolute_path == path.resolve()
    assert resolved.absolute_path.is_absolute()
    assert resolved.extension == ".pdf"


def test_resolve_local_file_lowercases_extension(config, upload_dir):
    write_upload(upload_dir, "SCAN.JPG")

    resolved = SourceResolver(config).resolve(PrintJobRequest(file_name="SCAN.JPG"))

    assert resolved.extension == ".jpg"


def test_resolve_local_file_in_subdirectory(config, upload_dir):
    write_upload(upload_dir, "batch/page1.png")

    resolved = SourceResolver(config).resolve(PrintJobRequest(file_name="batch/page1.png"))

    assert resolved.name == "page1.png"


def test_resolve_missing_file_raises_not_found(config):
    with pytest.raises(NotFoundError, match="File not found") as exc:
        SourceResolver(config).resolve(PrintJobRequest(file_name="missing.txt"))

    assert exc.value.status_code == 404


def test_resolve_directory_raises_not_found(config, upload_dir):
    (upload_dir / "folder").mkdir()

    with pytest.raises(NotFoundError):
        SourceResolver(config).resolve(PrintJobRequest(file_name="folder"))


@pytest.mark.parametrize("name", ["../secret.txt", "a/../../secret.txt", "/etc/passwd", "..", "."])
def test_local_path_rejects_names_outside_upload_dir(config, upload_dir, name):
    (upload_dir.parent / "secret.txt").write_text("secret")

    with pytest.raises(ValidationError, match="inside the upload directory"):
        SourceResolver(config).resolve(PrintJobRequest(file_name=name))


def test_local_path_rejects_symlink_escaping_upload_dir(config, upload_dir, tmp_path):
    outside = tmp_path / "outside.pdf"
    outside.write_bytes(b"x")
    link = upload_dir / "link.pdf"
    try:
        link.symlink_to(outside)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    with pytest.raises(ValidationError):
        SourceResolver(config).resolve(PrintJobRequest(file_name="link.pdf"))


# ---------------------------------------------------------------------------
# Remote branch
# ---------------------------------------------------------------------------

def test_download_writes_generated_file(config, upload_dir):
    session = FakeSession({"http://host/pic.png": FakeResponse(chunks=[b"\x89PNG", b"data"])})

    resolved = SourceResolver(config, session=session).resolve(PrintJobRequest(url="http://host/pic.png"))

    assert resolved.absolute_path.parent == upload_dir
    assert GENERATED_NAME.match(resolved.name)
    assert resolved.name.endswith(".png")
    assert resolved.extension == ".png"
    assert resolved.absolute_path.read_bytes() == b"\x89PNGdata"


def test_download_streams_with_timeout(config):
    session = FakeSession(default=FakeResponse(chunks=[b"x"]))

    SourceResolver(config, session=session).download("https://host/file.pdf")

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://host/file.pdf")
    assert kwargs["stream"] is True
    assert kwargs["timeout"] == config.download_timeout


def test_download_without_extension_uses_dat(config):
    session = FakeSession(default=FakeResponse(chunks=[b"x"]))

    path = SourceResolver(config, session=session).download("http://host/download?id=3")

    assert path.suffix == ".dat"
    assert len(path.stem) == 32


@pytest.mark.parametrize("status", [404, 500, 302])
def test_download_non_2xx_raises_and_leaves_no_file(config, upload_dir, status):
    session = FakeSession(default=FakeResponse(status_code=status, reason="Bad"))

    with pytest.raises(DownloadError) as exc:
        SourceResolver(config, session=session).resolve(PrintJobRequest(url="http://host/a.pdf"))

    assert exc.value.status_code == 500
    assert str(status) in exc.value.details
    assert _files(upload_dir) == []


def test_download_network_failure_raises(config, upload_dir):
    session = FakeSession(error=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(DownloadError, match="Failed to download file from URL"):
        SourceResolver(config, session=session).download("http://host/a.pdf")

    assert _files(upload_dir) == []


def test_download_mid_stream_failure_removes_partial_file(config, upload_dir):
    response = FakeResponse(chunks=[b"part1", b"part2", b"part3"], fail_after=2)
    session = FakeSession(default=response)

    with pytest.raises(DownloadError):
        SourceResolver(config, session=session).download("http://host/big.pdf")

    assert _files(upload_dir) == []


def test_download_rejects_non_http_urls(config):
    session = FakeSession(default=FakeResponse(chunks=[b"x"]))

    with pytest.raises(ValidationError, match="http or https"):
        SourceResolver(config, session=session).download("file:///etc/passwd")

    assert session.calls == []


def test_downloads_of_identical_content_never_collide(config, upload_dir):
    session = FakeSession(default=lambda: FakeResponse(chunks=[b"same content"]))
    resolver = SourceResolver(config, session=session)
    paths = []
    lock = threading.Lock()

    def download():
        path = resolver.download("http://host/same.pdf")
        with lock:
            paths.append(path)

    threads = [threading.Thread(target=download) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(paths) == 16
    assert len(set(paths)) == 16
    assert len(_files(upload_dir)) == 16


def test_download_never_overwrites_or_removes_existing_file(config, upload_dir, monkeypatch):
    existing = write_upload(upload_dir, "taken.pdf", b"original")
    monkeypatch.setattr("docprint_service.resolver.generate_file_name", lambda ext: "taken.pdf")
    session = FakeSession({"http://host/a.pdf": FakeResponse(chunks=[b"new"])})

    with pytest.raises(DownloadError):
        SourceResolver(config, session=session).download("http://host/a.pdf")

    assert existing.read_bytes() == b"original"
    assert _files(upload_dir) == ["taken.pdf"]


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------

def test_store_upload_and_list_files(config, upload_dir):
    resolver = SourceResolver(config)

    path = resolver.store_upload(io.BytesIO(b"hello"), "Letter.TXT")

    assert path.parent == upload_dir
    assert GENERATED_NAME.match(path.name)
    assert path.suffix == ".txt"
    assert path.read_bytes() == b"hello"
    assert resolver.list_files() == [{"name": path.name, "path": path.name}]


def test_store_upload_never_overwrites_or_removes_existing_file(config, upload_dir, monkeypatch):
    existing = write_upload(upload_dir, "taken.txt", b"original")
    monkeypatch.setattr("docprint_service.resolver.generate_file_name", lambda ext: "taken.txt")

    with pytest.raises(FileExistsError):
        SourceResolver(config).store_upload(io.BytesIO(b"new"), "letter.txt")

    assert existing.read_bytes() == b"original"


def test_list_files_includes_subdirectories(config, upload_dir):
    write_upload(upload_dir, "b.pdf")
    write_upload(upload_dir, "nested/a.png")

    files = SourceResolver(config).list_files()

    assert {"name": "a.png", "path": "nested/a.png"} in files
    assert {"name": "b.pdf", "path": "b.pdf"} in files
    assert len(files) == 2
