from __future__ import annotations

import json
from pathlib import Path

import typer

from spellrank.cli.common import handle_errors
from spellrank.datasets.wordlist import iter_words
from spellrank.postprocess.rank import suggest
from spellrank.text.tokenize import tokenize
from spellrank.utils.cancel import CancelToken
from spellrank.utils.config import load_engine_config

app = typer.Typer(help="Spelling suggestions from a word list.")


@app.command("word")
def suggest_word(
    query: str = typer.Argument(..., help="Word to correct."),
    dictionary: Path = typer.Option(..., exists=True, dir_okay=False, help="Word list (one word per line)."),
    config: Path = typer.Option(None, exists=True, dir_okay=False),
    max_distance: int = typer.Option(None, min=0),
    top_n: int = typer.Option(None, min=1),
    workers: int = typer.Option(None, min=1),
    deadline: float = typer.Option(None, help="Give up after this many seconds."),
    classic: bool = typer.Option(False, "--classic", help="Ignore transpositions (plain Levenshtein)."),
    casefold: bool = typer.Option(False, "--casefold", help="Compare case-insensitively."),
    as_json: bool = typer.Option(False, "--json"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar while scanning."),
):
    """Rank dictionary words by edit distance to QUERY."""
    with handle_errors():
        cfg = load_engine_config(config).override(
            max_distance=max_distance,
            top_n=top_n,
            workers=workers,
            deadline_s=deadline,
            transpositions=False if classic else None,
            casefold=True if casefold else None,
        )
        tok_opts = cfg.tokenize_options()
        cancel = CancelToken(cfg.deadline_s) if cfg.deadline_s is not None else None
        result = suggest(
            tokenize(query, **tok_opts),
            iter_words(dictionary, progress=progress, **tok_opts),
            cfg.max_distance,
            cfg.top_n,
            cfg.costs,
            transpositions=cfg.transpositions,
            workers=cfg.workers,
            chunk_size=cfg.chunk_size,
            cancel=cancel,
        )

    if as_json:
        rows = [{"word": c.text, "distance": c.distance} for c in result]
        typer.echo(json.dumps({"query": query, "suggestions": rows}, ensure_ascii=False))
        return
    if not len(result):
        typer.echo("no suggestions", err=True)
        return
    for c in result:
        typer.echo(f"{c.distance}\t{c.text}")
