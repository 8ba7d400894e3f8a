from typing import Protocol


class Notifier(Protocol):
    async def notify(self, summary: str, body: str, icon: str) -> None: ...
