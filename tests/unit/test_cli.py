"""Tests for the blockdrag CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from blockdrag.cli import app
from tests.unit.conftest import NESTED_DOC, SIMPLE_DOC

runner = CliRunner()


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


def _no_settings(tmp_path: Path) -> list[str]:
    return ["--settings", str(tmp_path / "settings.json")]


def test_drop_moves_block_in_file(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", SIMPLE_DOC)

    result = runner.invoke(app, ["drop", str(doc), "2", "3", *_no_settings(tmp_path)])

    assert result.exit_code == 0, result.output
    assert doc.read_text() == "- A\n- C\n\t- B\n"


def test_drop_parent_mode(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", SIMPLE_DOC)

    result = runner.invoke(
        app, ["drop", str(doc), "2", "1", "--mode", "parent", *_no_settings(tmp_path)]
    )

    assert result.exit_code == 0, result.output
    assert doc.read_text() == "- A\n- B\n- C\n"


def test_drop_embeds_across_files(tmp_path: Path) -> None:
    source = _write(tmp_path, "source.md", SIMPLE_DOC)
    target = _write(tmp_path, "notes.md", "Notes\n")

    result = runner.invoke(
        app, ["drop", str(source), "2", "1", "--target", str(target), *_no_settings(tmp_path)]
    )

    assert result.exit_code == 0, result.output
    source_text = source.read_text()
    assert source_text.count(" ^") == 1
    block_id = source_text.split("^")[1].split("\n")[0]
    assert target.read_text() == f"Notes ![[source#^{block_id}]]\n"


def test_drop_uses_settings_file(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", NESTED_DOC)
    settings = _write(tmp_path, "settings.json", json.dumps({"simple_same_pane": "copy"}))

    result = runner.invoke(
        app, ["drop", str(doc), "3", "5", "-m", "parent", "--settings", str(settings)]
    )

    assert result.exit_code == 0, result.output
    assert doc.read_text() == NESTED_DOC[:-1] + "\n- C\n"


def test_dry_run_prints_edits_and_keeps_file(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", SIMPLE_DOC)

    result = runner.invoke(app, ["drop", str(doc), "2", "3", "--dry-run", *_no_settings(tmp_path)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["source"] == [{"start": 3, "end": 8, "insert": ""}]
    assert data["destination"] == [{"start": 12, "end": 12, "insert": "\n\t- B"}]
    assert doc.read_text() == SIMPLE_DOC


def test_drop_onto_itself_reports_nothing_to_do(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", SIMPLE_DOC)

    result = runner.invoke(app, ["drop", str(doc), "2", "2", *_no_settings(tmp_path)])

    assert result.exit_code == 0
    assert "Nothing to do" in result.output
    assert doc.read_text() == SIMPLE_DOC


def test_drop_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["drop", str(tmp_path / "nope.md"), "1", "1"])
    assert result.exit_code == 1


def test_drop_rejects_unknown_mode(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", SIMPLE_DOC)
    result = runner.invoke(app, ["drop", str(doc), "2", "3", "--mode", "sideways"])
    assert result.exit_code == 1


def test_resolve_shows_block_and_nested_items(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", NESTED_DOC)

    result = runner.invoke(app, ["resolve", str(doc), "1"])

    assert result.exit_code == 0, result.output
    assert "listItem lines 1-4" in result.output
    assert "nested items at lines [2, 4, 3]" in result.output


def test_resolve_miss_exits_with_error(tmp_path: Path) -> None:
    doc = _write(tmp_path, "doc.md", "Just text\n")
    result = runner.invoke(app, ["resolve", str(doc), "1"])
    assert result.exit_code == 1
    assert "No listItem at line 1" in result.output


def test_settings_command_prints_defaults(tmp_path: Path) -> None:
    result = runner.invoke(app, ["settings", *_no_settings(tmp_path)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["simple_same_pane"] == "move"
    assert data["simple_different_panes"] == "embed"
    assert data["show_handle_on_hover"] is True
