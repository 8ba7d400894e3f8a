from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Collection, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import Change, DefaultFilter, awatch

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[set[Path]], Coroutine[Any, Any, None]]


class GeneratedFileFilter(DefaultFilter):
    """``DefaultFilter`` that also drops the files a bundle job writes.

    The compiler writes its output through a temporary ``<bundle>.XXXXXX``
    sibling before renaming it, so names starting with ``<generated>.`` are
    dropped as well.
    """

    def __init__(self, generated_names: Collection[str] = ()) -> None:
        super().__init__()
        self.generated_names = frozenset(generated_names)

    def is_generated(self, path: str) -> bool:
        name = Path(path).name
        return any(name == g or name.startswith(f"{g}.") for g in self.generated_names)

    def __call__(self, change: Change, path: str) -> bool:
        return not self.is_generated(path) and super().__call__(change, path)


class DropFolderWatcher:
    """Call *on_change* with the changed paths of a drop folder.

    Implements the ``FolderWatcher`` port on top of ``watchfiles.awatch``.
    Changes that only touch generated files never reach the handler.
    """

    def __init__(
        self,
        folder: str | Path,
        on_change: ChangeHandler,
        generated_names: Collection[str] = (),
        debounce_ms: int = 800,
    ) -> None:
        self.folder = Path(folder)
        self.watch_filter = GeneratedFileFilter(generated_names)
        self._on_change = on_change
        self._debounce_ms = debounce_ms
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self._task is not None:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run())
        logger.info("Watching drop folder %s", self.folder)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s", self.folder)

    async def _run(self) -> None:
        async for changes in awatch(
            self.folder,
            watch_filter=self.watch_filter,
            debounce=self._debounce_ms,
            stop_event=self._stop_event,
        ):
            paths = {Path(p) for change, p in changes if self.watch_filter(change, p)}
            if not paths:
                continue
            logger.info("%d path(s) changed in %s", len(paths), self.folder)
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Rebuild after change in %s failed", self.folder)
