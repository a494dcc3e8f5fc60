import httpx
import pytest

from edhms.common.api.exceptions import MalformedUpstreamResponse, UpstreamUnavailable
from edhms.insights.client import GeminiClient


def _client(handler):
    return GeminiClient(api_key="k", base_url="https://ai.test/v1beta", transport=httpx.MockTransport(handler))


def test_generate_returns_first_candidate_text():
    def handler(request):
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-pro:generateContent"
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "hello"}]}}]})

    with _client(handler) as c:
        assert c.generate("gemini-pro", "hi") == "hello"


def test_transport_error_is_upstream_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamUnavailable):
        _client(handler).generate("gemini-pro", "hi")


def test_empty_candidates_is_malformed():
    with pytest.raises(MalformedUpstreamResponse):
        _client(lambda r: httpx.Response(200, json={"candidates": []})).generate("gemini-pro", "hi")


def test_no_retry_on_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={})

    with pytest.raises(UpstreamUnavailable):
        _client(handler).generate("gemini-pro", "hi")
    assert len(calls) == 1
