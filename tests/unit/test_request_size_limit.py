"""Tests for the request body size limit middleware."""

from httpx import ASGITransport, AsyncClient

from dossierhub.middleware import RequestSizeLimitMiddleware


async def _echo_length(scope, receive, send) -> None:
    total = 0
    while True:
        message = await receive()
        total += len(message.get("body", b""))
        if not message.get("more_body", False):
            break
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": str(total).encode()})


def _client(max_bytes: int) -> AsyncClient:
    app = RequestSizeLimitMiddleware(_echo_length, max_bytes=max_bytes)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_small_body_passes() -> None:
    async with _client(10) as client:
        response = await client.post("/", content=b"12345")
    assert response.status_code == 200
    assert response.text == "5"


async def test_declared_length_over_limit_is_413() -> None:
    async with _client(10) as client:
        response = await client.post("/", content=b"x" * 11)
    assert response.status_code == 413
    body = response.json()
    assert body["error"] == "PAYLOAD_TOO_LARGE"
    assert body["details"] == {"max_bytes": 10, "content_length": 11}


async def test_streamed_body_over_limit_is_413() -> None:
    async def chunks():
        for _ in range(3):
            yield b"x" * 6

    async with _client(10) as client:
        response = await client.post("/", content=chunks())
    assert response.status_code == 413


async def test_streamed_body_under_limit_is_replayed() -> None:
    async def chunks():
        yield b"abc"
        yield b"de"

    async with _client(10) as client:
        response = await client.post("/", content=chunks())
    assert response.status_code == 200
    assert response.text == "5"
