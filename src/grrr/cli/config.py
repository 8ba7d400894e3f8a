"""Commands for the persisted bundle settings."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from grrr.config import ConfigStore, SettingsDraft

config_app = typer.Typer(help="Show or change the default bundle name and prefix.")
console = Console()


@config_app.command("show")
def show() -> None:
    """Show the current settings."""
    store = ConfigStore()
    config = store.load()
    table = Table(show_header=False)
    table.add_row("name", config.name)
    table.add_row("prefix", config.prefix)
    table.add_row("file", str(store.path))
    console.print(table)


@config_app.command("set")
def set_(
    name: Annotated[str | None, typer.Option(help="Bundle name; empty resets to the default.")] = None,
    prefix: Annotated[str | None, typer.Option(help="Resource prefix; empty resets to the default.")] = None,
) -> None:
    """Change the stored settings."""
    store = ConfigStore()
    draft = SettingsDraft.from_config(store.load())
    if name is not None:
        draft.name = name
    if prefix is not None:
        draft.prefix = prefix
    config = draft.snapshot()

    try:
        saved = store.save(config)
    except OSError as exc:
        console.print(f"[red]Cannot save settings: {exc}[/red]")
        raise typer.Exit(1) from exc
    if saved:
        console.print(f"[green]Saved[/green] {store.path}")
    else:
        console.print("Settings unchanged.")
    console.print(f"name={config.name} prefix={config.prefix}")


@config_app.command("path")
def path() -> None:
    """Print the settings file location."""
    console.print(str(ConfigStore().path))
