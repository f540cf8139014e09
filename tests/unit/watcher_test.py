"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from watchfiles import Change

from schemagen.watcher.watchfiles_adapter import SchemaFilter, WatchfilesWatcher


class TestSchemaFilter:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/schemas/ResetRequest.json", True),
            ("/schemas/v2.1/ResetResponse.json", True),
            ("/schemas/reset.py", False),
            ("/schemas/ResetRequest.json~", False),
            ("/schemas/README", False),
            ("/schemas/.git/ResetRequest.json", False),
        ],
    )
    def test_filter(self, path: str, expected: bool) -> None:
        assert SchemaFilter()(Change.modified, path) is expected

    def test_deleted_schema_passes(self) -> None:
        assert SchemaFilter()(Change.deleted, "/schemas/ResetRequest.json") is True


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from schemagen.core.ports.watcher import SchemaWatcherPort

        watcher: SchemaWatcherPort = WatchfilesWatcher("/tmp", AsyncMock())
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        watcher = WatchfilesWatcher("/schemas", AsyncMock(), debounce_ms=50)

        with patch("schemagen.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            await asyncio.sleep(0)
            assert watcher.running
            await watcher.stop()
            assert not watcher.running

        args, kwargs = mock_awatch.call_args
        assert args == (Path("/schemas"),)
        assert isinstance(kwargs["watch_filter"], SchemaFilter)
        assert kwargs["debounce"] == 50

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())
        await watcher.stop()
        assert not watcher.running

    @pytest.mark.asyncio
    async def test_double_start_keeps_task(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())

        with patch("schemagen.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            await asyncio.sleep(0)
            task = watcher._task
            await watcher.start()
            assert watcher._task is task
            await watcher.stop()

        mock_awatch.assert_called_once()

    @pytest.mark.asyncio
    async def test_callback_receives_changed_paths(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/schemas", callback)
        changes = {(Change.modified, "/schemas/ResetRequest.json"), (Change.deleted, "/schemas/ResetResponse.json")}

        with patch("schemagen.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once_with({Path("/schemas/ResetRequest.json"), Path("/schemas/ResetResponse.json")})

    @pytest.mark.asyncio
    async def test_empty_batch_is_ignored(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/schemas", callback)

        with patch("schemagen.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(set())
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_callback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher("/schemas", callback)

        caplog.set_level(logging.ERROR, logger="schemagen.watcher.watchfiles_adapter")
        with patch("schemagen.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(Change.added, "/schemas/ResetRequest.json")})
            await watcher.start()
            await asyncio.sleep(0.05)
            # The watch loop survives the failure.
            assert watcher.running
            await watcher.stop()

        assert "Regeneration after schema change failed" in caplog.text


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # pragma: no cover


async def _single_change_iter(changes: set[tuple[Change, str]]) -> AsyncIterator[set[tuple[Change, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
