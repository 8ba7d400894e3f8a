"""Run ``glib-compile-resources`` without blocking the event loop."""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from grrr.core.ports.notifier import Notifier
from grrr.errors import LaunchError
from grrr.models import PathRef

logger = logging.getLogger(__name__)

DEFAULT_COMPILER = "glib-compile-resources"
BUNDLE_SUFFIX = ".gresource"

NOTIFICATION_SUMMARY = "Gresource file generated!"
NOTIFICATION_ICON = "dialog-information"


def default_compiler() -> str:
    return os.getenv("GRRR_COMPILER", DEFAULT_COMPILER)


def bundle_name_for(manifest_name: str) -> str:
    """Return the file glib-compile-resources writes when no --target is given."""
    name = manifest_name.removesuffix(".xml")
    if name.endswith(BUNDLE_SUFFIX):
        return name
    return name + BUNDLE_SUFFIX


class JobState(enum.Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    LAUNCH_FAILED = "launch_failed"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CompileResult:
    base: Path
    manifest_name: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def bundle_name(self) -> str:
        return bundle_name_for(self.manifest_name)

    @property
    def bundle_path(self) -> Path:
        return self.base / self.bundle_name


CompletionCallback = Callable[[CompileResult], None]


@dataclass
class CompileJob:
    """One compiler run, from launch until its process exits."""

    base: Path
    manifest_name: str
    on_complete: CompletionCallback | None = None
    compiler: str = field(default_factory=default_compiler)
    notifier: Notifier | None = None
    state: JobState = JobState.IDLE
    process: asyncio.subprocess.Process | None = None
    _watcher: asyncio.Task[CompileResult] | None = field(default=None, repr=False)

    async def start(self) -> None:
        if self.state is not JobState.IDLE:
            raise RuntimeError(f"Job already started (state: {self.state.value})")
        self.state = JobState.LAUNCHING

        env = dict(os.environ)
        executable = shutil.which(self.compiler, path=env.get("PATH"))
        if executable is None:
            self.state = JobState.LAUNCH_FAILED
            raise LaunchError(f"Compiler not found: {self.compiler}")

        try:
            self.process = await asyncio.create_subprocess_exec(
                executable,
                self.manifest_name,
                cwd=str(self.base),
                env=env,
            )
        except OSError as exc:
            self.state = JobState.LAUNCH_FAILED
            raise LaunchError(f"Cannot start {self.compiler}: {exc}") from exc

        self.state = JobState.RUNNING
        logger.info("Started %s (pid %d) in %s", self.compiler, self.process.pid, self.base)
        self._watcher = asyncio.create_task(self._watch())

    async def wait(self) -> CompileResult:
        if self._watcher is None:
            raise RuntimeError("Job was never started")
        return await self._watcher

    @property
    def done(self) -> bool:
        return self.state is JobState.COMPLETED

    async def _watch(self) -> CompileResult:
        assert self.process is not None
        returncode = await self.process.wait()
        self.process = None
        self.state = JobState.COMPLETED

        result = CompileResult(base=self.base, manifest_name=self.manifest_name, returncode=returncode)
        if result.ok:
            logger.info("Compiled %s in %s", result.bundle_name, self.base)
            await self._notify(result)
        else:
            logger.warning("%s exited with status %d for %s", self.compiler, returncode, self.manifest_name)

        if self.on_complete is not None:
            try:
                self.on_complete(result)
            except Exception:
                logger.exception("Error in completion callback")
        return result

    async def _notify(self, result: CompileResult) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.notify(
                NOTIFICATION_SUMMARY,
                f"{result.bundle_name} generated at {result.base}",
                NOTIFICATION_ICON,
            )
        except Exception:
            logger.debug("Notification failed", exc_info=True)


async def start_compile(
    base: PathRef | Path,
    manifest_name: str,
    on_complete: CompletionCallback | None = None,
    *,
    compiler: str | None = None,
    notifier: Notifier | None = None,
) -> CompileJob:
    """Launch the compiler for *manifest_name* inside *base*.

    Raises ``LaunchError`` straight away when the process cannot be started;
    otherwise returns the running job, whose ``on_complete`` fires once on exit.
    """
    base_path = base.path if isinstance(base, PathRef) else Path(base)
    job = CompileJob(
        base=base_path,
        manifest_name=manifest_name,
        on_complete=on_complete,
        compiler=compiler or default_compiler(),
        notifier=notifier,
    )
    await job.start()
    return job
