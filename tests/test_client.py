from unittest.mock import Mock, patch

import pytest
import requests

from talentinsight.config import Config, GEMINI_API_BASE
from talentinsight.errors import TransportError
from talentinsight.infrastructure.llm import GeminiRestClient, inline_data_part, text_part


def _response(status_code=200, payload=None, text=""):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = payload if payload is not None else {}
    return resp


def _answer(*parts):
    return {"candidates": [{"content": {"role": "model", "parts": list(parts)}, "finishReason": "STOP"}]}


@pytest.fixture
def client():
    return GeminiRestClient(api_key="test-key", model="gemini-2.5-flash")


def test_requires_key_or_project():
    with pytest.raises(ValueError):
        GeminiRestClient()


def test_gemini_endpoint_and_api_key_header(client):
    with patch("talentinsight.infrastructure.llm.client.requests.post") as post:
        post.return_value = _response(payload=_answer({"text": "{}"}))
        client.generate_content([text_part("halo")])

    url = post.call_args.args[0]
    assert url == f"{GEMINI_API_BASE}/models/gemini-2.5-flash:generateContent"
    assert post.call_args.kwargs["headers"]["x-goog-api-key"] == "test-key"


def test_body_shape(client):
    parts = [inline_data_part("audio/wav", "UklGRg=="), text_part("Analisis")]
    schema = {"type": "OBJECT", "properties": {}}

    with patch("talentinsight.infrastructure.llm.client.requests.post") as post:
        post.return_value = _response(payload=_answer({"text": "{}"}))
        client.generate_content(parts, response_schema=schema, temperature=0.2, thinking_budget=4096)

    body = post.call_args.kwargs["json"]
    assert body["contents"] == [{"role": "user", "parts": parts}]
    config = body["generationConfig"]
    assert config["responseMimeType"] == "application/json"
    assert config["responseSchema"] == schema
    assert config["thinkingConfig"] == {"thinkingBudget": 4096}
    assert config["temperature"] == 0.2


def test_text_parts_are_joined_and_thoughts_skipped(client):
    payload = _answer({"text": "thinking...", "thought": True}, {"text": '{"a": '}, {"text": "1}"})
    with patch("talentinsight.infrastructure.llm.client.requests.post", return_value=_response(payload=payload)):
        assert client.generate_content([text_part("x")]) == '{"a": 1}'


def test_no_candidates_yields_empty_text(client):
    payload = {"promptFeedback": {"blockReason": "SAFETY"}}
    with patch("talentinsight.infrastructure.llm.client.requests.post", return_value=_response(payload=payload)):
        assert client.generate_content([text_part("x")]) == ""


def test_http_error_raises_transport_error(client):
    resp = _response(status_code=403, text='{"error": {"message": "API key not valid"}}')
    with patch("talentinsight.infrastructure.llm.client.requests.post", return_value=resp):
        with pytest.raises(TransportError) as excinfo:
            client.generate_content([text_part("x")])
    assert excinfo.value.status_code == 403


def test_network_error_raises_transport_error(client):
    with patch("talentinsight.infrastructure.llm.client.requests.post",
               side_effect=requests.ConnectionError("offline")):
        with pytest.raises(TransportError):
            client.generate_content([text_part("x")])


def test_vertex_endpoint_uses_bearer_token():
    client = GeminiRestClient(project="acme-hr", location="asia-southeast1", model="gemini-2.5-flash")
    client._credentials = Mock(valid=True, token="tok")
    assert client.endpoint == (
        "https://asia-southeast1-aiplatform.googleapis.com/v1/projects/acme-hr/locations/"
        "asia-southeast1/publishers/google/models/gemini-2.5-flash:generateContent"
    )
    assert client._headers()["Authorization"] == "Bearer tok"


class _ExpiringCredentials:
    """Stand-in for google-auth credentials: `valid` turns False once the token expires."""

    def __init__(self):
        self.refresh_count = 0
        self.valid = False
        self.token = None

    def refresh(self, request):
        self.refresh_count += 1
        self.valid = True
        self.token = f"tok-{self.refresh_count}"


def test_vertex_token_is_loaded_once_and_refreshed_when_expired():
    client = GeminiRestClient(project="acme-hr", model="gemini-2.5-flash")
    creds = _ExpiringCredentials()
    with patch("talentinsight.infrastructure.llm.client.google.auth.default", return_value=(creds, "acme-hr")) as default:
        assert client._headers()["Authorization"] == "Bearer tok-1"
        assert client._headers()["Authorization"] == "Bearer tok-1"

        creds.valid = False
        assert client._headers()["Authorization"] == "Bearer tok-2"

    assert default.call_count == 1
    assert creds.refresh_count == 2


def test_from_config_prefers_api_key():
    config = Config(api_key="k", model_name="gemini-2.5-pro", llm_timeout=30)
    client = GeminiRestClient.from_config(config)
    assert client.api_key == "k"
    assert client.model == "gemini-2.5-pro"
    assert client.timeout == 30
