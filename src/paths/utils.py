"""Filesystem path helpers. None of them raise; failures map to a neutral value."""

import os
import re
from pathlib import Path
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)

# Windows-reserved characters and ASCII control codes.
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_combine(first: str | None, second: str | None) -> str:
    if not first or not first.strip() or not second or not second.strip():
        return ""
    try:
        return os.path.join(first, second)
    except (TypeError, ValueError):
        return ""


def safe_dirname(file_path: str | None) -> str:
    if not file_path or not file_path.strip():
        return ""
    return os.path.dirname(file_path)


def ensure_directory_exists(directory: str | None) -> bool:
    if not directory or not directory.strip():
        return False
    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
        return True
    except OSError as exc:
        logger.warning("directory_create_failed", directory=directory, error=str(exc))
        return False


def make_relative_path(full_path: str | None, base_path: str | None) -> str | None:
    if not full_path or not full_path.strip() or not base_path or not base_path.strip():
        return full_path
    try:
        return os.path.relpath(os.path.abspath(full_path), os.path.abspath(base_path))
    except ValueError:
        # Different drives on Windows have no relative form.
        return full_path


def has_valid_extension(file_path: str | None, *valid_extensions: str) -> bool:
    if not file_path or not file_path.strip() or not valid_extensions:
        return False
    extension = os.path.splitext(file_path)[1].lower()
    return any(extension == candidate.lower() for candidate in valid_extensions)


def sanitize_filename(filename: str | None, replacement: str = "_") -> str:
    if not filename or not filename.strip():
        return ""
    return _INVALID_FILENAME_CHARS.sub(replacement, filename)


def normalize_file_path(raw_path: str | None, report_error: Callable[[str], None]) -> str:
    """Absolute form of ``raw_path`` with its parent directory created.

    Problems go to ``report_error`` and the empty string is returned.
    """
    if not raw_path or not raw_path.strip():
        return ""
    try:
        full_path = Path(raw_path).expanduser().resolve()
        full_path.parent.mkdir(parents=True, exist_ok=True)
        return str(full_path)
    except (OSError, RuntimeError, ValueError) as exc:
        report_error(f"Invalid file path '{raw_path}': {exc}")
        return ""
