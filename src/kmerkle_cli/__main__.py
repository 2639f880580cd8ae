from __future__ import annotations
import json
import logging
import pathlib
from typing import List, Optional

import typer
from rich import print
from rich.markup import escape
from pydantic import ValidationError

from kmerkle.logutil import setup_logging
from kmerkle.merkle import MerkleTree
from kmerkle.models import canonical_json, check_export, export_tree
from kmerkle.render import format_tree
from kmerkle.settings import get_settings

app = typer.Typer(add_completion=False, no_args_is_help=True)
log = logging.getLogger(__name__)


@app.callback()
def main():
    """Build Keccak-256 Merkle trees over ordered string leaves."""
    try:
        s = get_settings()
    except ValidationError as e:
        print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    setup_logging(s.log_level, max_chars=s.max_log_chars)


def _split_leaf_lines(text: str) -> List[str]:
    """One leaf per line, split on LF only; a CR before the LF is dropped."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _load_tree(leaves: Optional[List[str]], file: Optional[str]) -> MerkleTree:
    values = list(leaves or [])
    if file is not None:
        try:
            # Raw bytes: text mode would also turn a lone CR into a newline
            text = pathlib.Path(file).read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[red]Cannot read leaves from {escape(file)}: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        values.extend(_split_leaf_lines(text))
    try:
        return MerkleTree.from_leaves(values)
    except ValueError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


@app.command()
def build(
    leaves: Optional[List[str]] = typer.Argument(None, help="Leaf values, in order"),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Read additional leaves, one per line"
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", help="Output format: text|json (default: KMERKLE_OUTPUT_FORMAT)"
    ),
):
    """Build a tree and print every level, or its canonical JSON export."""
    tree = _load_tree(leaves, file)
    fmt = (fmt or get_settings().output_format).lower()
    log.info("built tree over %d leaves, root %s", len(tree.leaves), tree.root_hex())
    if fmt == "text":
        # Plain echo: rich would wrap lines and interpret [markup] in leaves
        typer.echo(format_tree(tree), nl=False)
    elif fmt == "json":
        typer.echo(canonical_json(export_tree(tree)).decode("utf-8"))
    else:
        raise typer.BadParameter("Unsupported format; choose text or json")


@app.command()
def root(
    leaves: Optional[List[str]] = typer.Argument(None, help="Leaf values, in order"),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Read additional leaves, one per line"
    ),
):
    """Print only the root hash as lowercase hex."""
    tree = _load_tree(leaves, file)
    typer.echo(tree.root_hex())


@app.command()
def check(path: str):
    """Rebuild a JSON export from its leaves and confirm it matches."""
    try:
        data = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
        ok = check_export(data)
    except OSError as e:
        print(f"[red]Cannot read export {escape(path)}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError both land here
        log.info("malformed export %s: %s", path, e)
        ok = False
    print({"export_valid": ok})
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
