import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from grrr.cli.bundle import bundle, drop
from grrr.cli.config import config_app
from grrr.cli.watch import watch

app = typer.Typer(
    name="grrr",
    help="Grrr! Bundle dropped files and folders into a GResource file.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("bundle")(bundle)
app.command("drop")(drop)
app.command("watch")(watch)
app.add_typer(config_app, name="config")


@app.callback()
def _setup(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def main() -> None:
    app()
