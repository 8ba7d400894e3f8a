import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from grrr.cli.bundle import CompilerOption, NameOption, NotifyFlag, PrefixOption, resolve_config, run_job
from grrr.core.bundle import folder_roots, generated_names
from grrr.core.ports.watcher import FolderWatcher
from grrr.errors import GrrrError
from grrr.notify.notify_send import NotifySendNotifier
from grrr.watcher.watchfiles_adapter import DropFolderWatcher

logger = logging.getLogger(__name__)
console = Console()


def watch(
    directory: Annotated[Path, typer.Argument(help="Folder to rebuild on every change.")],
    name: NameOption = None,
    prefix: PrefixOption = None,
    compiler: CompilerOption = None,
    notify: NotifyFlag = True,
) -> None:
    """Rebuild the bundle inside DIRECTORY whenever its contents change.

    The manifest and bundle are written into DIRECTORY itself, so its
    children are what gets bundled.
    """
    if not directory.is_dir():
        console.print(f"[red]Not a directory: {directory}[/red]")
        raise typer.Exit(1)

    directory = directory.resolve()
    config = resolve_config(name, prefix)
    notifier = NotifySendNotifier() if notify else None

    async def _rebuild(_changed: set[Path]) -> None:
        try:
            await run_job(folder_roots(directory, config), config, compiler=compiler, notifier=notifier)
        except GrrrError as exc:
            console.print(f"[red]{exc}[/red]")

    async def _run() -> None:
        watcher: FolderWatcher = DropFolderWatcher(directory, _rebuild, generated_names(config))
        await _rebuild(set())
        await watcher.start()
        console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.debug("Watch interrupted")
