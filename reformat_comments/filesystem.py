"""Filesystem helpers for reformat-comments."""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .constants import (
    BACKUP_SUFFIX,
    BACKUP_TIMESTAMP_FORMAT,
    DEFAULT_MAX_FILE_SIZE,
    SOURCE_EXTENSIONS,
)

MAX_FILE_SIZE_ENV_VAR = "REFORMAT_COMMENTS_MAX_FILE_SIZE"


class ReadSourceError(Exception):
    """Raised when a source file cannot be read or decoded."""


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["REFORMAT_COMMENTS_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a source filepath under a base directory.

    Args:
        raw_path: User-supplied path to a source file (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the source file.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("src/Widget.cs", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in SOURCE_EXTENSIONS:
        error_message = f"{resolved} is not a supported source file.\n"
        error_message += f"Supported extensions are: {', '.join(SOURCE_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Detect changes between two filesystem snapshots.

    Raises:
        IOError: If inode, device, size, or modification time differ.
    """
    fingerprint_before = (
        getattr(expected_stat, "st_ino", None),
        getattr(expected_stat, "st_dev", None),
        expected_stat.st_size,
        expected_stat.st_mtime_ns,
    )
    fingerprint_after = (
        getattr(current_stat, "st_ino", None),
        getattr(current_stat, "st_dev", None),
        current_stat.st_size,
        current_stat.st_mtime_ns,
    )

    if fingerprint_before != fingerprint_after:
        error_message = f"{filepath} changed during processing; refusing to overwrite."
        raise IOError(error_message)


def read_source(filepath: Path) -> str:
    """Read a source file as UTF-8 text, keeping its line breaks untouched.

    Raises:
        ReadSourceError: If the file is missing, inaccessible, or not valid UTF-8.

    Examples:
        source = read_source(Path("Widget.cs"))
    """
    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ReadSourceError(error_message) from error
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise ReadSourceError(error_message) from error


def backup_path_for(filepath: Path, backup_dir: Path | None, now: datetime | None = None) -> Path:
    """Compute where the backup copy of `filepath` goes.

    Without a backup directory the copy sits next to the file with a ``.bak``
    suffix. With one, the copy is placed in that directory and a millisecond
    timestamp is inserted before the extension.

    Examples:
        backup_path_for(Path("src/Widget.cs"), None)  # src/Widget.cs.bak
        backup_path_for(Path("src/Widget.cs"), Path("bak"), datetime(2024, 5, 1, 9, 30))
        # bak/Widget.2024-05-01--09.30.00.000.cs
    """
    if backup_dir is None:
        return filepath.with_name(filepath.name + BACKUP_SUFFIX)

    now = now or datetime.now()
    timestamp = f"{now.strftime(BACKUP_TIMESTAMP_FORMAT)}.{now.microsecond // 1000:03d}"
    return backup_dir / f"{filepath.stem}.{timestamp}{filepath.suffix}"


def create_backup(filepath: Path, backup_dir: Path | None = None, now: datetime | None = None) -> Path:
    """Copy `filepath` byte for byte to its backup location.

    An existing backup at the same location is overwritten; the backup
    directory is created when missing.

    Returns:
        Path: Location of the backup copy.

    Raises:
        IOError: If the directory cannot be created or the copy fails.
    """
    target = backup_path_for(filepath, backup_dir, now)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(filepath, target)
    except OSError as error:
        error_message = f"Could not back up {filepath} to {target}: {error}"
        raise IOError(error_message) from error
    return target


def write_source(
    filepath: Path,
    text: str,
    expected_stat: os.stat_result,
    initial_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Atomically replace a source file with reformatted text.

    The text is written in text mode, so ``"\\n"`` becomes the platform line
    break.

    Args:
        filepath: Path to the source file to rewrite.
        text: New file contents.
        expected_stat: File stat captured after reading, used to detect races.
        initial_stat: File stat captured before reading, used to preserve access time.
        warn: Optional callback for emitting non-fatal warnings (e.g., ownership preservation).

    Raises:
        IOError: If the file changes between reading and writing or cannot be
            updated atomically.
    """
    current_stat = collect_file_stat(filepath)
    ensure_file_unchanged(expected_stat, current_stat, filepath)

    permissions = stat.S_IMODE(expected_stat.st_mode)
    uid = getattr(expected_stat, "st_uid", None)
    gid = getattr(expected_stat, "st_gid", None)
    atime_ns = initial_stat.st_atime_ns

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)

            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

            # Ownership can only be kept with elevated privileges
            if uid is not None and gid is not None and hasattr(os, "chown"):
                try:
                    os.chown(tmp_file.name, uid, gid)
                except PermissionError:
                    if warn is not None:
                        warn(
                            f"Warning: Could not preserve file ownership for {filepath.name} "
                            "(requires elevated privileges)"
                        )

        os.replace(temp_path, filepath)

        # Keep the original access time; mtime reflects the rewrite
        current_stat = filepath.stat()
        os.utime(filepath, ns=(atime_ns, current_stat.st_mtime_ns))
    except OSError as error:
        error_message = f"Could not write {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                Path(temp_path).unlink(missing_ok=True)
            except OSError:
                pass
