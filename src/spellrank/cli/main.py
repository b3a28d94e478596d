from __future__ import annotations

import typer

from spellrank.cli import distance as distance_cmd
from spellrank.cli import suggest as suggest_cmd
from spellrank.cli.common import setup_logging

app = typer.Typer(help="spellrank: edit distance and spelling suggestions.")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
):
    setup_logging(log_level)


app.add_typer(distance_cmd.app, name="distance")
app.add_typer(suggest_cmd.app, name="suggest")
