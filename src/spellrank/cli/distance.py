from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import typer

from spellrank.cli.common import handle_errors
from spellrank.distance.levenshtein import distance, distance_with_trace
from spellrank.distance.ops import Delete, EditOperation, Insert, Substitute
from spellrank.distance.osa import osa_distance, osa_distance_with_trace
from spellrank.text.tokenize import tokenize
from spellrank.utils.config import load_engine_config

app = typer.Typer(help="Edit distance between two words.")


def format_operation(op: EditOperation) -> str:
    if isinstance(op, Insert):
        return f"insert     {op.pos} {op.unit}"
    if isinstance(op, Delete):
        return f"delete     {op.pos} {op.unit}"
    if isinstance(op, Substitute):
        return f"substitute {op.pos} {op.source} -> {op.target}"
    return f"transpose  {op.pos}"


def _op_record(op: EditOperation) -> dict:
    return {"op": type(op).__name__.lower(), **asdict(op)}


def _run(a: str, b: str, trace: bool, as_json: bool, config: Path | None, transpositions: bool) -> None:
    with handle_errors():
        cfg = load_engine_config(config)
        a_seq = tokenize(a, **cfg.tokenize_options())
        b_seq = tokenize(b, **cfg.tokenize_options())
        if trace:
            fn = osa_distance_with_trace if transpositions else distance_with_trace
            d, ops = fn(a_seq, b_seq, cfg.costs)
        else:
            fn = osa_distance if transpositions else distance
            d, ops = fn(a_seq, b_seq, cfg.costs), ()

    if as_json:
        payload: dict = {"a": a, "b": b, "distance": d}
        if trace:
            payload["operations"] = [_op_record(op) for op in ops]
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return
    typer.echo(str(d))
    for op in ops:
        typer.echo(format_operation(op))


@app.command("levenshtein")
def levenshtein_cmd(
    a: str = typer.Argument(...),
    b: str = typer.Argument(...),
    trace: bool = typer.Option(False, "--trace", help="Also print the edit operations."),
    as_json: bool = typer.Option(False, "--json"),
    config: Path = typer.Option(None, exists=True, dir_okay=False),
):
    """Classic Levenshtein distance (insert, delete, substitute)."""
    _run(a, b, trace, as_json, config, transpositions=False)


@app.command("osa")
def osa_cmd(
    a: str = typer.Argument(...),
    b: str = typer.Argument(...),
    trace: bool = typer.Option(False, "--trace", help="Also print the edit operations."),
    as_json: bool = typer.Option(False, "--json"),
    config: Path = typer.Option(None, exists=True, dir_okay=False),
):
    """Optimal string alignment distance (adds adjacent transpositions)."""
    _run(a, b, trace, as_json, config, transpositions=True)
