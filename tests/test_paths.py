import os
from pathlib import Path

from src.paths.utils import (
    ensure_directory_exists,
    has_valid_extension,
    make_relative_path,
    normalize_file_path,
    safe_combine,
    safe_dirname,
    sanitize_filename,
)


def test_safe_combine() -> None:
    assert safe_combine("/repos", "bridge").endswith("bridge")
    assert safe_combine("", "bridge") == ""
    assert safe_combine("/repos", None) == ""


def test_safe_dirname() -> None:
    assert safe_dirname("/var/log/bridge.log") == "/var/log"
    assert safe_dirname("  ") == ""


def test_ensure_directory_exists_creates_nested(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"

    assert ensure_directory_exists(str(target))
    assert target.is_dir()
    assert ensure_directory_exists(str(target))
    assert not ensure_directory_exists("")


def test_ensure_directory_exists_fails_on_file(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")

    assert not ensure_directory_exists(str(blocker / "child"))


def test_make_relative_path(tmp_path: Path) -> None:
    full = tmp_path / "logs" / "bridge.log"

    assert make_relative_path(str(full), str(tmp_path)) == os.path.join("logs", "bridge.log")
    assert make_relative_path(str(full), "") == str(full)


def test_has_valid_extension() -> None:
    assert has_valid_extension("bridge.LOG", ".log", ".txt")
    assert not has_valid_extension("bridge.csv", ".log")
    assert not has_valid_extension("bridge.log")
    assert not has_valid_extension("", ".log")


def test_sanitize_filename() -> None:
    assert sanitize_filename('run:1/2*"x".log') == "run_1_2__x_.log"
    assert sanitize_filename("a<b>", "-") == "a-b-"
    assert sanitize_filename("   ") == ""


def test_normalize_file_path_creates_parent(tmp_path: Path) -> None:
    errors: list[str] = []
    raw = tmp_path / "nested" / "bridge.log"

    normalized = normalize_file_path(str(raw), errors.append)

    assert normalized == str(raw.resolve())
    assert raw.parent.is_dir()
    assert errors == []


def test_normalize_file_path_reports_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    errors: list[str] = []

    raw = str(blocker / "child" / "bridge.log")
    assert normalize_file_path(raw, errors.append) == ""
    assert len(errors) == 1
    assert errors[0].startswith(f"Invalid file path '{raw}':")


def test_normalize_file_path_empty_input_is_silent() -> None:
    errors: list[str] = []

    assert normalize_file_path("", errors.append) == ""
    assert errors == []
