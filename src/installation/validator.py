"""Structural checks for an Unreal Engine installation used as the LiveLink runtime.

Two editor generations are recognised: UE4 (``UE4Editor``) and UE5
(``UnrealEditor``). An installation is usable when at least one editor
executable exists and every required engine library is present under either
generation's naming.
"""

import re
from pathlib import Path
from typing import NamedTuple, Protocol

import structlog

from src.contracts.results import InstallationValidationResult

logger = structlog.get_logger(__name__)

BINARIES_DIR = ("Engine", "Binaries", "Win64")
UE5_EDITOR = BINARIES_DIR + ("UnrealEditor.exe",)
UE4_EDITOR = BINARIES_DIR + ("UE4Editor.exe",)
VERSION_FOLDER_PREFIX = "UE_"
UNKNOWN_VERSION = "Unknown"


class RequiredLibrary(NamedTuple):
    ue5_name: str
    ue4_name: str


REQUIRED_LIBRARIES: tuple[RequiredLibrary, ...] = (
    RequiredLibrary("UnrealEditor-Core.dll", "UE4Editor-Core.dll"),
    RequiredLibrary("UnrealEditor-ApplicationCore.dll", "UE4Editor-ApplicationCore.dll"),
)


class Filesystem(Protocol):
    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...


class LocalFilesystem:
    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()


def _display(parts: tuple[str, ...]) -> str:
    return "/".join(parts)


def _detect_editors(root: Path, filesystem: Filesystem) -> tuple[bool, bool]:
    return filesystem.is_file(root.joinpath(*UE4_EDITOR)), filesystem.is_file(root.joinpath(*UE5_EDITOR))


def _version_from_folder(path: str) -> str | None:
    # Split on both separators so Windows-style paths work on any host.
    folder = re.split(r"[\\/]", path.strip().rstrip("\\/"))[-1]
    if folder.upper().startswith(VERSION_FOLDER_PREFIX):
        return folder[len(VERSION_FOLDER_PREFIX) :]
    return None


def _version_from_editors(has_ue4_editor: bool, has_ue5_editor: bool) -> str:
    if has_ue5_editor and has_ue4_editor:
        return "5.x (with UE4 compatibility)"
    if has_ue5_editor:
        return "5.x"
    if has_ue4_editor:
        return "4.x"
    return UNKNOWN_VERSION


def get_version(path: str | None, filesystem: Filesystem | None = None) -> str:
    """Version label from a ``UE_<version>`` folder name, else from the editors present."""
    if path is None or not path.strip():
        return UNKNOWN_VERSION
    try:
        from_folder = _version_from_folder(path)
        if from_folder is not None:
            return from_folder
        has_ue4_editor, has_ue5_editor = _detect_editors(Path(path), filesystem or LocalFilesystem())
        return _version_from_editors(has_ue4_editor, has_ue5_editor)
    except Exception as exc:  # noqa: BLE001
        logger.debug("version_detection_failed", path=path, error=str(exc))
        return UNKNOWN_VERSION


def is_valid_installation(path: str | None, filesystem: Filesystem | None = None) -> bool:
    """Quick filter: directory exists and holds one of the editor executables."""
    if path is None or not path.strip():
        return False
    filesystem = filesystem or LocalFilesystem()
    try:
        root = Path(path)
        if not filesystem.is_dir(root):
            return False
        return any(_detect_editors(root, filesystem))
    except Exception as exc:  # noqa: BLE001
        logger.debug("installation_check_failed", path=path, error=str(exc))
        return False


def _find_missing_library(binaries: Path, filesystem: Filesystem) -> RequiredLibrary | None:
    for library in REQUIRED_LIBRARIES:
        if filesystem.is_file(binaries / library.ue5_name):
            continue
        if filesystem.is_file(binaries / library.ue4_name):
            continue
        return library
    return None


def _validate(path: str, filesystem: Filesystem) -> InstallationValidationResult:
    root = Path(path)
    if not filesystem.is_dir(root):
        return InstallationValidationResult.invalid(path, f"Directory does not exist: {path}")

    has_ue4_editor, has_ue5_editor = _detect_editors(root, filesystem)
    if not has_ue4_editor and not has_ue5_editor:
        return InstallationValidationResult.invalid(
            path,
            "No Unreal Engine executable found. Expected "
            f"{_display(UE4_EDITOR)} or {_display(UE5_EDITOR)}",
        )

    binaries = root.joinpath(*BINARIES_DIR)
    missing = _find_missing_library(binaries, filesystem)
    if missing is not None:
        return InstallationValidationResult.invalid(
            path,
            f"Required Unreal Engine library not found: {missing.ue5_name} or "
            f"{missing.ue4_name} in {binaries}",
        )

    executable = root.joinpath(*(UE5_EDITOR if has_ue5_editor else UE4_EDITOR))
    return InstallationValidationResult(
        path=path,
        is_valid=True,
        version=get_version(path, filesystem),
        executable_path=str(executable),
        has_ue4_editor=has_ue4_editor,
        has_ue5_editor=has_ue5_editor,
    )


def validate_installation(path: str | None, filesystem: Filesystem | None = None) -> InstallationValidationResult:
    """Full structural validation. Failures are reported in the result, never raised."""
    if path is None or not path.strip():
        return InstallationValidationResult.invalid(path or "", "Installation path cannot be empty")

    try:
        result = _validate(path, filesystem or LocalFilesystem())
    except Exception as exc:  # noqa: BLE001
        result = InstallationValidationResult.invalid(path, f"Cannot inspect installation at {path}: {exc}")

    if result.is_valid:
        logger.debug("installation_valid", path=path, version=result.version)
    else:
        logger.info("installation_invalid", path=path, error=result.error_message)
    return result
