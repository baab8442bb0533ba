from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path

import pytest

import reformat_comments.cli as cli_module
from reformat_comments.filesystem import (
    MAX_FILE_SIZE_ENV_VAR,
    backup_path_for,
    collect_file_stat,
    ensure_file_unchanged,
    get_max_file_size,
    write_source,
)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    target = tmp_path / name
    target.write_text(content, encoding="utf-8")
    return target


def _error_text(result) -> str:
    """Return combined stdout and exception text for assertions."""
    return f"{result.output}{result.exception}"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_symlink_rejected(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "Source.cs", "/// <summary>x</summary>\n")
    link = tmp_path / "Alias.cs"
    try:
        os.symlink(source, link, target_is_directory=False)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    result = cli_runner.invoke(cli_module.cli, [str(link)])
    assert result.exit_code != 0
    assert "Symlinks" in result.output


def test_path_traversal_prevented(cli_runner, tmp_path, monkeypatch):
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    outside = tmp_path / f"outside-{uuid.uuid4().hex}.cs"
    outside.write_text("/// <summary>x</summary>\n", encoding="utf-8")

    result = cli_runner.invoke(cli_module.cli, [str(outside)])
    assert result.exit_code != 0
    assert "outside of the working directory" in result.output


def test_file_size_limit_enforced(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "10")
    target = _write(tmp_path, "Large.cs", "X" * 20)

    result = cli_runner.invoke(cli_module.cli, [str(target)])
    assert result.exit_code != 0
    assert "maximum allowed size" in _error_text(result)


def test_file_size_limit_from_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "pyproject.toml").write_text(
        "[tool.reformat-comments]\nmax_file_size = 5\n", encoding="utf-8"
    )
    target = _write(tmp_path, "Large.cs", "X" * 20)

    result = cli_runner.invoke(cli_module.cli, [str(target)])
    assert result.exit_code != 0
    assert "maximum allowed size of 5 bytes" in _error_text(result)


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_max_file_size_env(monkeypatch, value: str):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, value)

    with pytest.raises(ValueError):
        get_max_file_size()


def test_ensure_file_unchanged_detects_modification(tmp_path):
    target = _write(tmp_path, "Race.cs", "int a;\n")
    before = collect_file_stat(target)
    target.write_text("int a; int b;\n", encoding="utf-8")
    after = collect_file_stat(target)

    with pytest.raises(IOError):
        ensure_file_unchanged(before, after, target)


def test_write_source_refuses_changed_file(tmp_path):
    target = _write(tmp_path, "Race.cs", "int a;\n")
    stat_before = collect_file_stat(target)
    target.write_text("changed by someone else\n", encoding="utf-8")

    with pytest.raises(IOError):
        write_source(target, "new\n", stat_before, stat_before)

    assert target.read_text(encoding="utf-8") == "changed by someone else\n"


def test_write_source_preserves_permissions(tmp_path):
    target = _write(tmp_path, "Perm.cs", "int a;\n")
    os.chmod(target, 0o640)
    stat_before = collect_file_stat(target)

    write_source(target, "int b;\n", stat_before, stat_before)

    assert target.read_text(encoding="utf-8") == "int b;\n"
    assert collect_file_stat(target).st_mode & 0o777 == 0o640
    assert [path.name for path in tmp_path.iterdir()] == ["Perm.cs"]


def test_backup_path_without_directory():
    assert backup_path_for(Path("src/Widget.cs"), None) == Path("src/Widget.cs.bak")


def test_backup_path_with_timestamp():
    now = datetime(2024, 5, 1, 9, 30, 0, 123456)

    path = backup_path_for(Path("src/Widget.cs"), Path("bak"), now)

    assert path == Path("bak/Widget.2024-05-01--09.30.00.123.cs")
