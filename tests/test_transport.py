"""Tests for the HTTP sync transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from wellcoach.exceptions import SyncTransportError
from wellcoach.sync import HttpTransport


def make_transport(handler) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport("https://sync.example.com/api/", client=client)


class TestHttpTransport:
    """Tests for HttpTransport."""

    def test_posts_json_to_key_url(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, str(request.url), json.loads(request.content)))
            return httpx.Response(201, json={"ok": True})

        async def scenario():
            async with make_transport(handler) as transport:
                await transport("food_entry_1", {"name": "Oats", "calories": 150})

        asyncio.run(scenario())

        assert seen == [(
            "POST",
            "https://sync.example.com/api/food_entry_1",
            {"name": "Oats", "calories": 150},
        )]

    def test_error_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        async def scenario():
            async with make_transport(handler) as transport:
                await transport("k", {})

        with pytest.raises(SyncTransportError) as exc_info:
            asyncio.run(scenario())

        assert exc_info.value.status_code == 500
        assert exc_info.value.key == "k"
        assert exc_info.value.details == {"key": "k", "status_code": 500}

    def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async def scenario():
            async with make_transport(handler) as transport:
                await transport("k", {})

        with pytest.raises(SyncTransportError) as exc_info:
            asyncio.run(scenario())

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_works_as_sync_manager_transport(self, make_manager) -> None:
        from wellcoach.sync import SyncQueue

        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(200)

        async def scenario():
            async with make_transport(handler) as transport:
                manager = make_manager(transport)
                queue = SyncQueue()
                await manager.queue_write({"v": 1}, "exercise_1", queue)
                await manager.wait_idle()
                return queue

        queue = asyncio.run(scenario())

        assert calls == ["/api/exercise_1"]
        assert queue.items == []
