from typing import Protocol


class FolderWatcher(Protocol):
    """Reports batches of changes under a drop folder until stopped."""

    @property
    def running(self) -> bool: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
