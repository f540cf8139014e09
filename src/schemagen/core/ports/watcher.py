from typing import Protocol


class SchemaWatcherPort(Protocol):
    """Something that reports schema directory changes until stopped."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
