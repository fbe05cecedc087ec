"""Tests for raw ASGI middleware (size limit, timeout)."""

import asyncio

from httpx import ASGITransport, AsyncClient

from app.middleware import RequestSizeLimitMiddleware, TimeoutMiddleware


async def _echo_app(scope, receive, send) -> None:
    body = b""
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise RuntimeError("client disconnected")
        body += message.get("body", b"")
        if not message.get("more_body"):
            break
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": body})


async def _slow_app(scope, receive, send) -> None:
    await asyncio.sleep(5)


def _client(asgi_app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=asgi_app), base_url="http://test")


class TestRequestSizeLimit:
    async def test_within_limit_passes(self) -> None:
        async with _client(RequestSizeLimitMiddleware(_echo_app, max_bytes=10)) as ac:
            response = await ac.post("/", content=b"12345")
        assert response.status_code == 200
        assert response.content == b"12345"

    async def test_declared_length_over_limit(self) -> None:
        async with _client(RequestSizeLimitMiddleware(_echo_app, max_bytes=10)) as ac:
            response = await ac.post("/", content=b"x" * 11)
        assert response.status_code == 413
        body = response.json()
        assert body["error"] == "PAYLOAD_TOO_LARGE"
        assert body["details"]["max_bytes"] == 10

    async def test_streamed_body_over_limit(self) -> None:
        async def chunks():
            for _ in range(4):
                yield b"x" * 5

        async with _client(RequestSizeLimitMiddleware(_echo_app, max_bytes=10)) as ac:
            response = await ac.post("/", content=chunks())
        assert response.status_code == 413


class TestTimeout:
    async def test_slow_request_gets_504(self) -> None:
        async with _client(TimeoutMiddleware(_slow_app, timeout_seconds=0.05)) as ac:
            response = await ac.get("/")
        assert response.status_code == 504
        assert response.json()["error"] == "GATEWAY_TIMEOUT"

    async def test_fast_request_untouched(self) -> None:
        async with _client(TimeoutMiddleware(_echo_app, timeout_seconds=1)) as ac:
            response = await ac.post("/", content=b"ok")
        assert response.status_code == 200
