import json

import httpx
from fastapi.testclient import TestClient

from sentiment_proxy.config import Settings
from sentiment_proxy.dependencies import get_sentiment_service
from sentiment_proxy.exceptions import UpstreamExhaustedError, UpstreamFatalError
from sentiment_proxy.services.sentiment_service import SentimentService

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


class DummySentimentService:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def analyze(self, text: str):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def get_test_client(app, service) -> TestClient:
    app.dependency_overrides[get_sentiment_service] = lambda: service
    return TestClient(app)


def post_through_upstream(app, handler, body) -> httpx.Response:
    """POST to the endpoint with a real service backed by a mock upstream."""

    settings = Settings(HUGGING_FACE_KEY="test-key", RETRY_DELAY=0)
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = SentimentService(upstream, settings)

    with get_test_client(app, service) as client:
        try:
            return client.post("/api/analyze", json=body)
        finally:
            client.portal.call(upstream.aclose)


def assert_cors(response) -> None:
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


def test_options_returns_cors_headers_without_upstream_call(app) -> None:
    service = DummySentimentService()
    client = get_test_client(app, service)

    response = client.options("/api/analyze")

    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)
    assert service.calls == []


def test_other_methods_are_rejected(app) -> None:
    service = DummySentimentService()
    client = get_test_client(app, service)

    for method in ("GET", "PUT", "DELETE", "PATCH"):
        response = client.request(method, "/api/analyze")
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert_cors(response)

    assert service.calls == []


def test_missing_text_is_rejected(app) -> None:
    service = DummySentimentService()
    client = get_test_client(app, service)

    for body in ({}, {"text": ""}, {"text": "   "}, {"text": None}):
        response = client.post("/api/analyze", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}

    response = client.post("/api/analyze")
    assert response.status_code == 400
    assert response.json() == {"error": "Text is required"}

    assert service.calls == []


def test_invalid_json_is_rejected(app) -> None:
    service = DummySentimentService()
    client = get_test_client(app, service)

    response = client.post(
        "/api/analyze",
        content="not-json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON payload"}
    assert service.calls == []


def test_text_length_enforced(app) -> None:
    service = DummySentimentService()
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "a" * 5001})

    assert response.status_code == 400
    assert "exceeds limit" in response.json()["error"]
    assert service.calls == []


def test_successful_analysis(app, positive_payload) -> None:
    service = DummySentimentService(result=positive_payload)
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "I love this"})

    assert response.status_code == 200
    assert response.json() == positive_payload
    assert_cors(response)
    assert service.calls == ["I love this"]


def test_fatal_upstream_error(app) -> None:
    service = DummySentimentService(error=UpstreamFatalError("model not found"))
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "model not found"}
    assert_cors(response)


def test_exhausted_upstream(app) -> None:
    service = DummySentimentService(
        error=UpstreamExhaustedError("service unavailable after multiple attempts")
    )
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "hello"})

    assert response.status_code == 503
    assert response.json() == {"error": "service unavailable after multiple attempts"}


def test_unexpected_fault_is_masked(app) -> None:
    service = DummySentimentService(error=RuntimeError("secret detail"))
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}


def test_end_to_end_with_mock_upstream(app, positive_payload) -> None:
    requests: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) < 3:
            return httpx.Response(503, json={"error": "Model is currently loading"})
        return httpx.Response(200, json=positive_payload)

    response = post_through_upstream(app, handler, {"text": "great movie"})

    assert response.status_code == 200
    assert response.json() == positive_payload
    assert len(requests) == 3
    assert json.loads(requests[0].content.decode()) == {"inputs": "great movie"}


def test_healthz(app) -> None:
    client = TestClient(app)

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_version(app) -> None:
    client = TestClient(app)

    response = client.get("/version")

    assert response.status_code == 200
    assert response.json()["environment"] == "test"


def test_text_is_forwarded_unchanged(app, positive_payload) -> None:
    requests: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=positive_payload)

    response = post_through_upstream(app, handler, {"text": "  padded text \n"})

    assert response.status_code == 200
    assert json.loads(requests[0].content.decode()) == {"inputs": "  padded text \n"}


def test_non_standard_json_constant_from_upstream(app) -> None:
    requests: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            content=b'[[{"label": "POSITIVE", "score": NaN}]]',
            headers={"Content-Type": "application/json"},
        )

    response = post_through_upstream(app, handler, {"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "unexpected response format"}
    assert_cors(response)
    assert len(requests) == 1


def test_unrenderable_payload_is_masked(app) -> None:
    service = DummySentimentService(result=[[{"label": "POSITIVE", "score": float("nan")}]])
    client = get_test_client(app, service)

    response = client.post("/api/analyze", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}
    assert_cors(response)
