"""ClearLine Backend - rule-based rewriting for audit and compliance prose."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


def _resolve_version() -> str:
    """Prefer the checkout's VERSION file, then installed package metadata."""
    if VERSION_FILE.is_file():
        return VERSION_FILE.read_text(encoding="utf-8").strip()
    try:
        return version("clearline")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _resolve_version()
