import pytest

from ideagraph.app import create_app
from ideagraph.config import AppConfig, LLMConfig
from ideagraph.errors import UpstreamError


@pytest.fixture
def client_for(app_config):
    """Flask test client over an app whose generator returns the given reply or error."""
    def _client(make_generator, reply=None, error=None):
        kwargs = {"error": error}
        if reply is not None:
            kwargs["reply"] = reply
        generator, fake = make_generator(**kwargs)
        app = create_app(app_config, idea_generator=generator)
        app.config.update(TESTING=True)
        return app.test_client(), fake
    return _client


def assert_error_shape(data, status, path):
    assert data["ok"] is False
    assert data["statusCode"] == status
    assert data["path"] == path
    assert data["timestamp"].endswith("Z")
    assert data["error"]
    assert data["message"]


def test_generate_ideas(client_for, make_generator):
    client, fake = client_for(make_generator)
    resp = client.post("/api/generate-ideas", json={"topic": "  Mindful productivity  "})
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["ok"] is True
    graph = data["graph"]
    assert [n["id"] for n in graph["nodes"]] == ["idea-1", "idea-2", "idea-3", "idea-4"]
    assert graph["nodes"][0]["type"] == "main"
    assert "script" not in graph["nodes"][0]
    assert graph["nodes"][1]["script"].startswith("2: HOOK:")
    assert graph["metadata"]["topic"] == "Mindful productivity"
    assert graph["metadata"]["version"] == "2.5-gemini"
    assert "generatedAt" in graph["metadata"]
    assert len(graph["edges"]) == 3
    assert fake.prompts[0].rstrip().endswith("Topic: Mindful productivity")


@pytest.mark.parametrize(
    "body",
    [None, {}, {"topic": ""}, {"topic": "   "}, {"topic": 42}, {"topic": "ok", "extra": 1}],
)
def test_generate_ideas_rejects_bad_bodies(client_for, make_generator, body):
    client, fake = client_for(make_generator)
    if body is None:
        resp = client.post("/api/generate-ideas", data="not json", content_type="text/plain")
    else:
        resp = client.post("/api/generate-ideas", json=body)
    assert resp.status_code == 400
    data = resp.get_json()
    assert_error_shape(data, 400, "/api/generate-ideas")
    assert isinstance(data["message"], list)
    assert fake.prompts == []


def test_topic_length_limit(client_for, make_generator):
    client, _ = client_for(make_generator)
    resp = client.post("/api/generate-ideas", json={"topic": "t" * 201})
    assert resp.status_code == 400
    assert "Maximum length is 200" in resp.get_json()["message"][0]
    assert client.post("/api/generate-ideas", json={"topic": "t" * 200}).status_code == 201


def test_upstream_error_is_502_with_details(client_for, make_generator):
    error = UpstreamError(429, body="quota exceeded", reason="Too Many Requests")
    client, _ = client_for(make_generator, error=error)
    resp = client.post("/api/generate-ideas", json={"topic": "Mindful productivity"})
    assert resp.status_code == 502
    data = resp.get_json()
    assert_error_shape(data, 502, "/api/generate-ideas")
    assert data["error"] == "UpstreamError"
    assert data["upstreamStatus"] == 429
    assert data["upstreamBody"] == "quota exceeded"


def test_empty_reply_is_502(client_for, make_generator):
    client, _ = client_for(make_generator, reply="   ")
    resp = client.post("/api/generate-ideas", json={"topic": "Mindful productivity"})
    assert resp.status_code == 502
    assert resp.get_json()["error"] == "EmptyContentError"


def test_missing_api_key_is_500():
    app = create_app(AppConfig(llm=LLMConfig(api_key=None)))
    resp = app.test_client().post("/api/generate-ideas", json={"topic": "Mindful productivity"})
    assert resp.status_code == 500
    data = resp.get_json()
    assert_error_shape(data, 500, "/api/generate-ideas")
    assert data["error"] == "ConfigurationError"


def test_parse_reply_does_not_call_model(client_for, make_generator):
    client, fake = client_for(make_generator)
    resp = client.post(
        "/api/parse-reply",
        json={"topic": "Instagram reel ideas", "text": "1. Hook them - fast cuts\n2. Second - more"},
    )
    assert resp.status_code == 200
    graph = resp.get_json()["graph"]
    assert [n["platform"] for n in graph["nodes"]] == ["Instagram", "Instagram"]
    assert [n["format"] for n in graph["nodes"]] == ["Video", "Video"]
    assert graph["edges"][0]["type"] == "hierarchical"
    assert fake.prompts == []


def test_parse_reply_requires_text(client_for, make_generator):
    client, _ = client_for(make_generator)
    resp = client.post("/api/parse-reply", json={"topic": "x", "text": "  "})
    assert resp.status_code == 400


def test_health_and_config(client_for, make_generator):
    client, _ = client_for(make_generator)
    health = client.get("/api/health").get_json()
    assert health["status"] == "ok"
    assert health["apiKeyConfigured"] is True
    assert client.get("/health").status_code == 200

    cfg = client.get("/api/config").get_json()
    assert cfg["llm"]["api_key"] == "****"
    assert cfg["generation"]["max_topic_length"] == 200


def test_unknown_route_is_json_404(client_for, make_generator):
    client, _ = client_for(make_generator)
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert_error_shape(resp.get_json(), 404, "/api/nope")
    assert resp.get_json()["error"] == "NotFound"


def test_wrong_method_is_json_405(client_for, make_generator):
    client, _ = client_for(make_generator)
    resp = client.get("/api/generate-ideas")
    assert resp.status_code == 405
    assert resp.get_json()["statusCode"] == 405
