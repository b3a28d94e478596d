from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from spellrank.utils.errors import Cancelled, SpellrankError


LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str) -> None:
    name = (level or "WARNING").upper().strip()
    if name not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise typer.BadParameter(f"unknown log level {level!r}", param_hint="--log-level")
    logging.basicConfig(level=getattr(logging, name), format=LOG_FORMAT, datefmt=DATE_FORMAT)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn engine errors into a short message and a non-zero exit code."""
    try:
        yield
    except Cancelled as e:
        typer.secho(f"cancelled: {e}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    except SpellrankError as e:
        typer.secho(f"error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
