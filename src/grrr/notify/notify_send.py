from __future__ import annotations

import asyncio
import logging
import shutil

logger = logging.getLogger(__name__)

_NOTIFY_SEND = "notify-send"
_TIMEOUT_MS = 1000


class NotifySendNotifier:
    """Show a transient desktop notification through ``notify-send``.

    Implements the ``Notifier`` protocol. Does nothing when ``notify-send``
    is not installed.
    """

    def __init__(self, timeout_ms: int = _TIMEOUT_MS) -> None:
        self._timeout_ms = timeout_ms

    async def notify(self, summary: str, body: str, icon: str) -> None:
        executable = shutil.which(_NOTIFY_SEND)
        if executable is None:
            logger.debug("%s not found, skipping notification", _NOTIFY_SEND)
            return
        process = await asyncio.create_subprocess_exec(
            executable,
            "-t",
            str(self._timeout_ms),
            "-i",
            icon,
            summary,
            body,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        returncode = await process.wait()
        if returncode != 0:
            logger.debug("%s exited with %d", _NOTIFY_SEND, returncode)
