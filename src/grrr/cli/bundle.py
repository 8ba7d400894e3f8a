import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from grrr.config import ConfigStore, SettingsDraft
from grrr.core.bundle import prepare_bundle
from grrr.core.compiler import CompileResult, start_compile
from grrr.core.drop import paths_from_drop_text
from grrr.core.ports.notifier import Notifier
from grrr.errors import GrrrError
from grrr.models import ManifestConfig
from grrr.notify.notify_send import NotifySendNotifier

console = Console()

NameOption = Annotated[str | None, typer.Option("--name", help="Bundle name (default from settings).")]
PrefixOption = Annotated[str | None, typer.Option("--prefix", help="Resource prefix (default from settings).")]
CompilerOption = Annotated[
    str | None, typer.Option("--compiler", help="Compiler executable (default: glib-compile-resources).")
]
CompileFlag = Annotated[bool, typer.Option("--compile/--no-compile", help="Run the compiler after writing.")]
NotifyFlag = Annotated[bool, typer.Option("--notify/--no-notify", help="Show a desktop notification.")]


def resolve_config(name: str | None, prefix: str | None) -> ManifestConfig:
    draft = SettingsDraft.from_config(ConfigStore().load())
    if name is not None:
        draft.name = name
    if prefix is not None:
        draft.prefix = prefix
    return draft.snapshot()


def _report(result: CompileResult) -> None:
    if result.ok:
        console.print(f"[green]Generated[/green] {result.bundle_name} at {result.base}")
    else:
        console.print(f"[red]Compiler exited with status {result.returncode}[/red]")


async def run_job(
    paths: Sequence[Path],
    config: ManifestConfig,
    *,
    compiler: str | None = None,
    notifier: Notifier | None = None,
    compile: bool = True,
) -> CompileResult | None:
    """Run one bundle job end to end and report on the console."""
    base, manifest = prepare_bundle(paths, config)
    console.print(f"[green]Wrote[/green] {manifest}")
    if not compile:
        return None
    job = await start_compile(base, manifest.name, _report, compiler=compiler, notifier=notifier)
    return await job.wait()


def _execute(
    paths: Sequence[Path],
    name: str | None,
    prefix: str | None,
    compiler: str | None,
    compile: bool,
    notify: bool,
) -> None:
    config = resolve_config(name, prefix)
    notifier = NotifySendNotifier() if notify else None
    try:
        result = asyncio.run(run_job(paths, config, compiler=compiler, notifier=notifier, compile=compile))
    except GrrrError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    if result is not None and not result.ok:
        raise typer.Exit(1)


def bundle(
    paths: Annotated[list[Path], typer.Argument(help="Files and folders to bundle.")],
    name: NameOption = None,
    prefix: PrefixOption = None,
    compiler: CompilerOption = None,
    compile: CompileFlag = True,
    notify: NotifyFlag = True,
) -> None:
    """Write a manifest for PATHS and compile it into a bundle."""
    _execute(paths, name, prefix, compiler, compile, notify)


def drop(
    name: NameOption = None,
    prefix: PrefixOption = None,
    compiler: CompilerOption = None,
    compile: CompileFlag = True,
    notify: NotifyFlag = True,
) -> None:
    """Bundle the paths or file:// URIs read from stdin, one per line."""
    try:
        paths = paths_from_drop_text(sys.stdin.read())
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    if not paths:
        console.print("[red]Nothing was dropped.[/red]")
        raise typer.Exit(1)
    _execute(paths, name, prefix, compiler, compile, notify)
