"""CLI for blockdrag: resolve blocks and replay drops on markdown files."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from blockdrag.buffer import FileBuffer
from blockdrag.core.policy import Modifiers
from blockdrag.core.structure.index import build_block_index
from blockdrag.core.structure.resolver import resolve_block
from blockdrag.core.tree.descendants import collect_descendants
from blockdrag.logging_config import configure_logging
from blockdrag.session import drag_over, drop, end_drag, start_drag
from blockdrag.settings import load_settings

app = typer.Typer(help="blockdrag: move, copy or embed list blocks in markdown files.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_buffer(path: Path) -> FileBuffer:
    """Open a markdown file, exiting if it doesn't exist."""
    try:
        return FileBuffer(path)
    except FileNotFoundError:
        logger.error("File not found: {}", path)
        raise typer.Exit(1) from None


@app.command()
def resolve(
    file: Path = typer.Argument(..., help="Markdown file"),
    line: int = typer.Argument(..., help="1-based line number"),
    kind: str = typer.Option("listItem", "--kind", "-k", help="listItem or paragraph"),
) -> None:
    """Show the block enclosing a line and the lines of its subtree."""
    if kind not in ("listItem", "paragraph"):
        typer.echo(f"Unknown block kind '{kind}'.")
        raise typer.Exit(1)

    buffer = _open_buffer(file)
    block = resolve_block(buffer.get_text(), line, kind)  # type: ignore[arg-type]
    if block is None:
        typer.echo(f"No {kind} at line {line}.")
        raise typer.Exit(1)

    typer.echo(f"{kind} lines {block.start_line}-{block.end_line}")
    typer.echo(f"  offsets {block.start_offset}-{block.end_offset}")
    if block.stable_id:
        typer.echo(f"  id=^{block.stable_id}")

    index = build_block_index(buffer.get_text())
    item = index.item_at(line)
    if kind == "listItem" and item is not None:
        group = collect_descendants([item], index.list_items)
        nested = [b.start_line for b in group.members[1:]]
        typer.echo(f"  nested items at lines {nested}" if nested else "  no nested items")


@app.command(name="drop")
def drop_cmd(
    source: Path = typer.Argument(..., help="File the block is dragged from"),
    line: int = typer.Argument(..., help="Line of the dragged block"),
    target_line: int = typer.Argument(..., help="Line the block is dropped on"),
    target: Annotated[
        Path | None,
        typer.Option("--target", "-t", help="File to drop into (default: the source file)"),
    ] = None,
    mode: str = typer.Option("current", "--mode", "-m", help="current (nest) or parent"),
    shift: bool = typer.Option(False, "--shift", help="Drop as if Shift were held"),
    alt: bool = typer.Option(False, "--alt", help="Drop as if Alt/Meta were held"),
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Settings JSON file"),
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Print edits, write nothing"),
) -> None:
    """Drop the block at LINE of SOURCE onto TARGET_LINE."""
    if mode not in ("current", "parent"):
        typer.echo(f"Unknown drop mode '{mode}'.")
        raise typer.Exit(1)

    dnd_settings = load_settings(settings_file)
    source_buffer = _open_buffer(source)
    if target is None or target.resolve() == source.resolve():
        target_buffer = source_buffer
    else:
        target_buffer = _open_buffer(target)

    try:
        target_offset = target_buffer.line(target_line).start
    except IndexError:
        typer.echo(f"Line {target_line} is outside {target_buffer.path}.")
        raise typer.Exit(1) from None

    session = start_drag(source_buffer, line)
    # A pointer well past any indentation nests; one at the left edge does not.
    pointer_x = 1e6 if mode == "current" else 0
    drag_over(session, indent_px=0, pointer_x=pointer_x, line_left=0)
    try:
        transfer = drop(
            session, target_buffer, target_offset, Modifiers(shift=shift, alt=alt), dnd_settings
        )
    finally:
        end_drag(session)

    if transfer.is_noop:
        typer.echo("Nothing to do.")
        return

    if dry_run:
        data = {
            "source": [asdict(e) for e in transfer.source_edits],
            "destination": [asdict(e) for e in transfer.destination_edits],
        }
        typer.echo(json.dumps(data, indent=2))
        return

    for buffer in {id(b): b for b in (source_buffer, target_buffer)}.values():
        buffer.save()
    typer.echo(
        f"Applied {len(transfer.source_edits)} source and "
        f"{len(transfer.destination_edits)} destination edit(s)"
    )


@app.command()
def settings(
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Settings JSON file"),
    ] = None,
) -> None:
    """Print the effective settings as JSON."""
    typer.echo(json.dumps(load_settings(settings_file).model_dump(), indent=2, sort_keys=True))
