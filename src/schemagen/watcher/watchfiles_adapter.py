from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import Change, DefaultFilter, awatch

from schemagen.core.processor import SCHEMA_SUFFIX

logger = logging.getLogger(__name__)

RegenerateCallback = Callable[[set[Path]], Coroutine[Any, Any, None]]


class SchemaFilter(DefaultFilter):
    """Pass only schema files, on top of the default ignore rules (VCS dirs, editor swap files, ...)."""

    def __call__(self, change: Change, path: str) -> bool:
        return path.endswith(SCHEMA_SUFFIX) and super().__call__(change, path)


class WatchfilesWatcher:
    """Report batches of changed schema files under a directory.

    Implements the ``SchemaWatcherPort`` protocol. A failing callback is logged
    and the watch goes on.
    """

    def __init__(self, directory: str | Path, on_change: RegenerateCallback, debounce_ms: int = 400) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._debounce_ms = debounce_ms
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watching %s for schema changes", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s", self._directory)

    async def _watch(self) -> None:
        async for changes in awatch(self._directory, watch_filter=SchemaFilter(), debounce=self._debounce_ms):
            paths = {Path(path) for _, path in changes}
            if not paths:
                continue
            removed = sum(1 for change, _ in changes if change == Change.deleted)
            logger.info("%d schema file(s) changed, %d removed", len(paths), removed)
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Regeneration after schema change failed")
