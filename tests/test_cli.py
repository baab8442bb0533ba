from __future__ import annotations

import textwrap
from pathlib import Path

from reformat_comments.cli import cli
from reformat_comments.constants import DIAGNOSTIC_PREFIX

MESSY = """\
/// <summary>
///   Gets the widget.
/// </summary>
public Widget Get() => null;
"""

TIDY = """\
/// <summary>Gets the widget.</summary>
public Widget Get() => null;
"""


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_rewrites_file_and_writes_bak(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Widget.cs", MESSY)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == ""
    assert target.read_text(encoding="utf-8") == TIDY
    assert (tmp_path / "Widget.cs.bak").read_text(encoding="utf-8") == MESSY


def test_cli_backup_is_byte_for_byte(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    original = MESSY.replace("\n", "\r\n").encode("utf-8")
    target = tmp_path / "Widget.cs"
    target.write_bytes(original)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert (tmp_path / "Widget.cs.bak").read_bytes() == original
    assert target.read_text(encoding="utf-8") == TIDY


def test_cli_overwrites_existing_bak(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Widget.cs", MESSY)
    _write(tmp_path, "Widget.cs.bak", "stale")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert (tmp_path / "Widget.cs.bak").read_text(encoding="utf-8") == MESSY


def test_cli_writes_timestamped_backup_to_directory(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Widget.cs", MESSY)

    result = cli_runner.invoke(cli, [str(target), "backups"])

    assert result.exit_code == 0
    backups = list((tmp_path / "backups").iterdir())
    assert len(backups) == 1
    assert backups[0].name.startswith("Widget.")
    assert backups[0].suffix == ".cs"
    assert backups[0].read_text(encoding="utf-8") == MESSY
    assert not (tmp_path / "Widget.cs.bak").exists()


def test_cli_reads_backup_dir_from_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.reformat-comments]
        backup_dir = "from-config"
        """,
    )
    target = _write(tmp_path, "Widget.vb", "''' <summary>\n''' Hi.\n''' </summary>\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert len(list((tmp_path / "from-config").iterdir())) == 1
    assert target.read_text(encoding="utf-8") == "''' <summary>Hi.</summary>\n"


def test_cli_reports_invalid_comments(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "Broken.cs",
        "class A {}\n/// <summary>Uses <foo/> here.</summary>\nvoid M();\n",
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert 'Warning: Broken.cs:2: I don\'t know whether "foo"' in result.output
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "class A {}"
    assert lines[1].startswith(DIAGNOSTIC_PREFIX)
    assert lines[2:] == ["/// <summary>Uses <foo/> here.</summary>", "void M();"]


def test_cli_wrap_width_option(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Narrow.cs", "/// <summary>alpha beta gamma delta epsilon</summary>\n")

    result = cli_runner.invoke(cli, ["--wrap-width", "30", str(target)])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == (
        "/// <summary>\n///     alpha beta gamma delta\n///     epsilon</summary>\n"
    )


def test_cli_flags_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.reformat-comments]
        indent_width = 8
        """,
    )
    target = _write(tmp_path, "Indent.cs", "/// <returns>Nothing.</returns>\n")

    result = cli_runner.invoke(cli, ["--indent-width", "2", str(target)])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "/// <returns>\n///   Nothing.</returns>\n"


def test_cli_rejects_invalid_config_values(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Widget.cs", MESSY)

    result = cli_runner.invoke(cli, ["--wrap-width", "0", str(target)])

    assert result.exit_code != 0
    assert "must be a positive integer" in result.output
    assert target.read_text(encoding="utf-8") == MESSY
    assert not (tmp_path / "Widget.cs.bak").exists()


def test_cli_rejects_unsupported_extension(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "notes.txt", MESSY)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "not a supported source file" in result.output


def test_cli_rejects_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "Latin1.cs"
    target.write_bytes("/// <summary>caf\xe9</summary>\n".encode("latin-1"))

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "Invalid UTF-8" in result.output
    assert not (tmp_path / "Latin1.cs.bak").exists()


def test_cli_verbose_flag(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "Widget.cs", MESSY)

    result = cli_runner.invoke(cli, ["--verbose", str(target)])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == TIDY
