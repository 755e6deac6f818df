import pytest
from fastapi.testclient import TestClient

from conftest import DEEPSEEK_URL, OPENAI_URL, completion

from pokeai_gateway.config import Settings
from pokeai_gateway.main import create_app


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "DEEPSEEK_API_KEY", "DEFAULT_MODEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_graphql_over_http_with_cors(clean_env, upstream):
    upstream.on(OPENAI_URL, json_body=completion("hello from openai"))
    app = create_app(make_settings(openai_api_key="sk-openai"), http_client=upstream.client())
    client = TestClient(app)

    response = client.post(
        "/graphql",
        json={"query": '{ askAI(prompt: "hi") { content provider } }'},
        headers={"Origin": "https://example.com"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.json() == {"data": {"askAI": {"content": "hello from openai", "provider": "openai"}}}


def test_field_errors_are_reported_in_graphql_response(clean_env, upstream):
    upstream.on(DEEPSEEK_URL, status=401, text="unauthorized")
    app = create_app(make_settings(deepseek_api_key="sk-ds"), http_client=upstream.client())
    client = TestClient(app)

    response = client.post(
        "/graphql",
        json={"query": '{ askAI(prompt: "hi", provider: "deepseek") { content } }'},
    )

    body = response.json()
    assert body["data"] == {"askAI": None}
    assert body["errors"][0]["message"] == "AI query failed: DeepSeek API error: 401 unauthorized"


def test_preflight(clean_env):
    client = TestClient(create_app(make_settings()))
    response = client.options("/graphql")

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_graphiql_is_served(clean_env):
    client = TestClient(create_app(make_settings()))
    response = client.get("/graphql", headers={"Accept": "text/html"})

    assert response.status_code == 200
    assert "graphiql" in response.text.lower()
    assert response.headers["access-control-allow-origin"] == "*"


def test_health_reports_credentials(clean_env):
    with TestClient(create_app(make_settings(deepseek_api_key="sk-ds"))) as client:
        response = client.get("/health")

    assert response.json() == {"status": "ok", "providers": {"openai": False, "deepseek": True}}


def test_health_degraded_without_credentials(clean_env):
    with TestClient(create_app(make_settings())) as client:
        assert client.get("/health").json()["status"] == "degraded"


def test_version(clean_env):
    client = TestClient(create_app(make_settings(environment="staging", default_model="gpt-4o", version="2.1.0")))
    assert client.get("/version").json() == {
        "service": "pokeai-gateway",
        "version": "2.1.0",
        "environment": "staging",
        "default_model": "gpt-4o",
    }


def test_stats_endpoint_counts_calls(clean_env, upstream):
    upstream.on(OPENAI_URL, status=500, text="down")
    upstream.on(DEEPSEEK_URL, json_body=completion(usage={"prompt_tokens": 2, "completion_tokens": 3, "total_tokens": 5}))
    app = create_app(
        make_settings(openai_api_key="sk-openai", deepseek_api_key="sk-ds"),
        http_client=upstream.client(),
    )
    client = TestClient(app)
    client.post("/graphql", json={"query": '{ askAI(prompt: "hi") { content } }'})

    stats = client.get("/stats").json()
    assert stats["total_calls"] == 2
    assert stats["total_failures"] == 1
    assert stats["total_fallbacks"] == 1
    assert stats["total_tokens"] == 5
    assert stats["recent_errors"][0]["provider"] == "openai"
