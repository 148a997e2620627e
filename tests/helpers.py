# tests/helpers.py

from docprint_service.platforms import WindowsPlatform

PROGRAM_FILES = r"C:\Program Files"
PROGRAM_FILES_X86 = r"C:\Program Files (x86)"
LOCAL_APP_DATA = r"C:\Users\print\AppData\Local"

EDGE = PROGRAM_FILES_X86 + r"\Microsoft\Edge\Application\msedge.exe"
CHROME = PROGRAM_FILES + r"\Google\Chrome\Application\chrome.exe"
CHROME_USER = LOCAL_APP_DATA + r"\Google\Chrome\Application\chrome.exe"
FIREFOX = PROGRAM_FILES + r"\Mozilla Firefox\firefox.exe"

WINDOWS_ENV = {
    "ProgramFiles": PROGRAM_FILES,
    "ProgramFiles(x86)": PROGRAM_FILES_X86,
    "LOCALAPPDATA": LOCAL_APP_DATA,
}

PRINTERS = ("HP LaserJet", "Microsoft Print to PDF")


def make_windows(config, installed=(), printers=PRINTERS, sumatra=False, environ=None):
    """WindowsPlatform with a fake filesystem probe and a fixed printer catalog."""
    present = set(installed)
    if sumatra:
        present.add(str(config.sumatra_path))

    platform = WindowsPlatform(
        sumatra_path=config.sumatra_path,
        environ=dict(WINDOWS_ENV) if environ is None else environ,
        exists=lambda path: path in present,
    )
    platform.list_printers = lambda: list(printers)
    return platform


def write_upload(upload_dir, name, content=b"%PDF-1.4 test"):
    path = upload_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path
