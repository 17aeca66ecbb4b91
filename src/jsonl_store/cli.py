"""Inspection CLI for JSONL files (count/first/last/find/delete/stats)."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import orjson
import typer
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.table import Table

from jsonl_store.errors import JsonlStoreError
from jsonl_store.infrastructure.logging import get_console
from jsonl_store.jsonl_file import JsonlFile, serialize
from jsonl_store.runtime import bootstrap
from jsonl_store.services.traversal import attribute_matcher

app = typer.Typer(help="Inspect and edit JSON Lines files")

FileArg = Annotated[Path, typer.Argument(help="JSONL file", dir_okay=False)]
JsonFlag = Annotated[bool, typer.Option("--json", help="Emit machine-readable output")]
WhereOpt = Annotated[str, typer.Option("--where", help="key=value (value parsed as JSON if possible)")]


def _console() -> Console:
    return get_console()


@app.callback()
def init() -> None:
    """Bootstrap environment (dotenv + settings + logging) before any command."""
    try:
        bootstrap()
    except ValueError as exc:  # pydantic ValidationError or a bad config root
        raise _fail(exc) from exc


def _parse_where(expr: str) -> tuple[str, Any]:
    if "=" not in expr:
        raise typer.BadParameter(f"Expected key=value, got {expr!r}", param_hint="--where")
    key, raw = expr.split("=", 1)
    if not key:
        raise typer.BadParameter("Empty key in --where", param_hint="--where")
    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError:
        value = raw
    return key, value


def _fail(exc: Exception) -> typer.Exit:
    _console().print(f"[red]error[/red]: {escape(str(exc))}")
    return typer.Exit(code=1)


def _emit_record(record: dict[str, Any], json_out: bool) -> None:
    if json_out:
        typer.echo(serialize(record))
    else:
        _console().print(JSON.from_data(record))


@app.command("count")
def count_cmd(
    file: FileArg,
    raw: Annotated[bool, typer.Option("--raw", help="Count non-blank lines, valid or not")] = False,
) -> None:
    jf = JsonlFile(file)
    typer.echo(str(jf.count_lines() if raw else jf.count()))


@app.command("first")
def first_cmd(file: FileArg, json_out: JsonFlag = False) -> None:
    try:
        record = JsonlFile(file).first()
    except JsonlStoreError as exc:
        raise _fail(exc) from exc
    _emit_record(record, json_out)


@app.command("last")
def last_cmd(file: FileArg, json_out: JsonFlag = False) -> None:
    try:
        record = JsonlFile(file).last()
    except JsonlStoreError as exc:
        raise _fail(exc) from exc
    _emit_record(record, json_out)


@app.command("find")
def find_cmd(
    file: FileArg,
    where: WhereOpt,
    limit: Annotated[int | None, typer.Option(help="Stop after N matches", min=1)] = None,
    json_out: JsonFlag = False,
) -> None:
    match = attribute_matcher(*_parse_where(where))
    jf = JsonlFile(file)
    found: list[dict[str, Any]] = []
    records = jf.iter_records()
    try:
        for record in records:
            if match(record):
                found.append(record)
                if limit is not None and len(found) >= limit:
                    break
    finally:
        records.close()
    if json_out:
        for record in found:
            typer.echo(serialize(record))
        return
    cons = _console()
    if not found:
        cons.print("[yellow]No matching records[/yellow]")
        return
    for record in found:
        cons.print(JSON.from_data(record))


@app.command("delete")
def delete_cmd(file: FileArg, where: WhereOpt, json_out: JsonFlag = False) -> None:
    key, value = _parse_where(where)
    try:
        removed = JsonlFile(file).delete_where(key, value)
    except JsonlStoreError as exc:
        raise _fail(exc) from exc
    if json_out:
        typer.echo(orjson.dumps({"deleted": removed}).decode("utf-8"))
        return
    _console().print(f"deleted [bold]{removed}[/bold] record(s) from {file}")


@app.command("stats")
def stats_cmd(file: FileArg, json_out: JsonFlag = False) -> None:
    stats = JsonlFile(file).scan_stats()
    if json_out:
        typer.echo(orjson.dumps(stats.model_dump()).decode("utf-8"))
        return
    table = Table(title=str(file))
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in stats.model_dump().items():
        table.add_row(name, str(value))
    table.add_row("lines", str(stats.lines))
    _console().print(table)


def main() -> None:  # console script entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
