import json
from typing import Any, Callable, Optional

import httpx
import pytest

from pokeai_gateway.config import GatewayConfig
from pokeai_gateway.stats import reset_llm_stats

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEEPSEEK_URL = "https://api.deepseek.com/v1/chat/completions"
POKEAPI_URL = "https://pokeapi.co/api/v2/pokemon/"


def completion(content: Optional[str] = "hello", usage: Optional[dict] = None) -> dict:
    """An OpenAI-style chat completion body."""
    body: dict[str, Any] = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": "whatever",
        "choices": [
            {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}
        ],
    }
    if usage is not None:
        body["usage"] = usage
    return body


def pokemon_payload(name: str, id: int, height: int, weight: int, types: list[str]) -> dict:
    return {
        "id": id,
        "name": name,
        "height": height,
        "weight": weight,
        "types": [{"slot": i + 1, "type": {"name": t, "url": ""}} for i, t in enumerate(types)],
        "sprites": {
            "front_default": f"https://img/{id}.png",
            "front_shiny": f"https://img/shiny/{id}.png",
            "front_female": None,
            "front_shiny_female": None,
            "back_default": f"https://img/back/{id}.png",
            "back_shiny": f"https://img/back/shiny/{id}.png",
            "back_female": None,
            "back_shiny_female": None,
            "other": {},
        },
    }


PIKACHU = pokemon_payload("pikachu", 25, 4, 60, ["electric"])
CHARIZARD = pokemon_payload("charizard", 6, 17, 905, ["fire", "flying"])


class FakeUpstream:
    """Routes requests by URL prefix to canned replies and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: list[tuple[str, Callable[[httpx.Request], httpx.Response]]] = []

    def on(
        self,
        url_prefix: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        exc: Optional[Exception] = None,
    ) -> "FakeUpstream":
        def reply(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, json=json_body)

        # Most recently registered route wins
        self._routes.insert(0, (url_prefix, reply))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        for prefix, reply in self._routes:
            if url.startswith(prefix):
                return reply(request)
        return httpx.Response(599, text=f"no fake route for {url}")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def calls_to(self, url_prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url).startswith(url_prefix)]

    def sent_json(self, url_prefix: str, index: int = 0) -> dict:
        return json.loads(self.calls_to(url_prefix)[index].content)


@pytest.fixture(autouse=True)
def _fresh_stats():
    reset_llm_stats()
    yield
    reset_llm_stats()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def both_keys() -> GatewayConfig:
    return GatewayConfig(openai_api_key="sk-openai", deepseek_api_key="sk-deepseek")


@pytest.fixture
def openai_only() -> GatewayConfig:
    return GatewayConfig(openai_api_key="sk-openai")


@pytest.fixture
def deepseek_only() -> GatewayConfig:
    return GatewayConfig(deepseek_api_key="sk-deepseek")


@pytest.fixture
def no_keys() -> GatewayConfig:
    return GatewayConfig()
