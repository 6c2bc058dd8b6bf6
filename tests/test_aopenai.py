import json
from typing import Any, Callable

import httpx
import pytest

from domain.aopenai import GatewayClient, openai_client_factory
from domain.errors import CreditsExhausted, RateLimited, ServiceUnavailable


def completion(content: Any, *, choices: int = 1) -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i in range(choices)
        ],
    }


class Gateway:
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> GatewayClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return GatewayClient(
            openai_client_factory(
                "test-key",
                base_url="https://gateway.test/v1",
                http_client=http_client,
            ),
            model="test-model",
        )


@pytest.mark.asyncio
async def test_complete() -> None:
    gateway = Gateway(lambda _: httpx.Response(200, json=completion("  Canelés!\n")))
    client = gateway.client()

    got = await client.complete(
        "You are a chef.",
        [{"role": "user", "content": "I want to make canelés"}],
    )

    assert got == "Canelés!"
    (request,) = gateway.requests
    assert request.url == "https://gateway.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert body["stream"] is False
    assert body["messages"] == [
        {"role": "system", "content": "You are a chef."},
        {"role": "user", "content": "I want to make canelés"},
    ]


@pytest.mark.parametrize(
    "status,error",
    (
        (429, RateLimited),
        (402, CreditsExhausted),
        (400, ServiceUnavailable),
        (500, ServiceUnavailable),
        (503, ServiceUnavailable),
    ),
)
@pytest.mark.asyncio
async def test_error_statuses(status: int, error: type[Exception]) -> None:
    gateway = Gateway(
        lambda _: httpx.Response(status, json={"error": {"message": "nope"}})
    )
    client = gateway.client()

    with pytest.raises(error):
        await client.complete("You are a chef.", [])

    assert len(gateway.requests) == 1


@pytest.mark.parametrize(
    "data",
    (
        completion(None),
        completion("   "),
        completion("unused", choices=0),
    ),
)
@pytest.mark.asyncio
async def test_missing_content(data: dict[str, Any]) -> None:
    client = Gateway(lambda _: httpx.Response(200, json=data)).client()

    with pytest.raises(ServiceUnavailable):
        await client.complete("You are a chef.", [])


@pytest.mark.parametrize(
    "exc",
    (
        httpx.ReadTimeout("too slow"),
        httpx.ConnectError("no route"),
    ),
)
@pytest.mark.asyncio
async def test_transport_failures(exc: Exception) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    gateway = Gateway(handler)
    client = gateway.client()

    with pytest.raises(ServiceUnavailable):
        await client.complete("You are a chef.", [])

    assert len(gateway.requests) == 1


@pytest.mark.asyncio
async def test_close() -> None:
    client = Gateway(lambda _: httpx.Response(200, json=completion("hi"))).client()
    await client.close()
    assert client.openai_client.is_closed()
