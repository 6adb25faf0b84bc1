"""
Tests for the analysis-service client and its settings. requests.post is replaced, so no
network traffic happens here.
"""

import pytest
import requests

from agent import analysis_client
from agent.analysis_client import AnalysisClient, BackendError
from agent.config import DEFAULT_ANALYSIS_API_URL, Settings, load_settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.text = text if text is not None else repr(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def calls(monkeypatch):
    """Records every requests.post call; set calls.response to control the reply."""
    class Recorder(list):
        response = FakeResponse(payload={"result": "ok"})

    recorder = Recorder()

    def fake_post(url, **kwargs):
        recorder.append((url, kwargs))
        if isinstance(recorder.response, Exception):
            raise recorder.response
        return recorder.response

    monkeypatch.setattr(analysis_client.requests, "post", fake_post)
    return recorder


class TestQuery:
    def test_sends_raw_inputs_as_json(self, calls):
        client = AnalysisClient("http://backend.test/analyze", timeout=5)
        client.query("  Bleach ", "mystery goo")
        url, kwargs = calls[0]
        assert url == "http://backend.test/analyze"
        assert kwargs["json"] == {"chem1": "  Bleach ", "chem2": "mystery goo"}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] == 5

    def test_returns_envelope(self, calls):
        calls.response = FakeResponse(payload={"result": {"type": "Safe"}})
        assert AnalysisClient().query("a", "b") == {"result": {"type": "Safe"}}

    def test_single_attempt(self, calls):
        calls.response = FakeResponse(status_code=503, payload={}, reason="Service Unavailable")
        with pytest.raises(BackendError):
            AnalysisClient().query("a", "b")
        assert len(calls) == 1

    def test_http_error_status(self, calls):
        calls.response = FakeResponse(status_code=500, text="boom", reason="Internal Server Error")
        with pytest.raises(BackendError) as exc:
            AnalysisClient().query("a", "b")
        assert exc.value.status_code == 500
        assert exc.value.raw == "boom"

    @pytest.mark.parametrize("status", [204, 299])
    def test_any_2xx_is_success(self, calls, status):
        calls.response = FakeResponse(status_code=status, payload={"result": "ok"})
        assert AnalysisClient().query("a", "b") == {"result": "ok"}

    @pytest.mark.parametrize("status", [300, 304, 307])
    def test_redirect_status_with_result_body_is_a_failure(self, calls, status):
        calls.response = FakeResponse(
            status_code=status,
            payload={"result": {"type": "Safe", "title": "T", "explanation": "E"}},
            reason="Redirect",
        )
        with pytest.raises(BackendError) as exc:
            AnalysisClient().query("a", "b")
        assert exc.value.status_code == status

    def test_transport_failure(self, calls):
        calls.response = requests.ConnectionError("connection refused")
        with pytest.raises(BackendError) as exc:
            AnalysisClient().query("a", "b")
        assert exc.value.status_code is None

    def test_error_field_is_a_failure(self, calls):
        calls.response = FakeResponse(payload={"error": "model overloaded"})
        with pytest.raises(BackendError, match="model overloaded"):
            AnalysisClient().query("a", "b")

    def test_non_json_body(self, calls):
        calls.response = FakeResponse(payload=None, text="<html>")
        with pytest.raises(BackendError):
            AnalysisClient().query("a", "b")

    @pytest.mark.parametrize("payload", [
        {"answer": "Safe"},
        {"result": 42},
        {"result": None},
        ["Safe"],
    ])
    def test_malformed_envelope(self, calls, payload):
        calls.response = FakeResponse(payload=payload)
        with pytest.raises(BackendError):
            AnalysisClient().query("a", "b")


class TestSettings:
    def test_defaults(self, monkeypatch):
        for key in ("ANALYSIS_API_URL", "ANALYSIS_TIMEOUT_SECONDS", "HISTORY_LIMIT", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        s = Settings.from_env()
        assert s.analysis_api_url == DEFAULT_ANALYSIS_API_URL
        assert s.analysis_timeout_seconds is None
        assert s.history_limit == 4
        assert s.log_level == "INFO"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_API_URL", "http://example.test/analyze")
        monkeypatch.setenv("ANALYSIS_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("HISTORY_LIMIT", "6")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings.from_env()
        assert s.analysis_api_url == "http://example.test/analyze"
        assert s.analysis_timeout_seconds == 12.5
        assert s.history_limit == 6
        assert s.log_level == "DEBUG"

        client = AnalysisClient.from_settings(s)
        assert client.url == "http://example.test/analyze"
        assert client.timeout == 12.5

    @pytest.mark.parametrize("key,value", [
        ("ANALYSIS_TIMEOUT_SECONDS", "soon"),
        ("ANALYSIS_TIMEOUT_SECONDS", "0"),
        ("HISTORY_LIMIT", "four"),
        ("HISTORY_LIMIT", "0"),
    ])
    def test_bad_values(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(RuntimeError, match=key):
            Settings.from_env()

    def test_load_settings_falls_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("HISTORY_LIMIT", "four")
        s, error = load_settings()
        assert s == Settings()
        assert "HISTORY_LIMIT" in error

    def test_load_settings_without_error(self, monkeypatch):
        monkeypatch.setenv("HISTORY_LIMIT", "6")
        monkeypatch.delenv("ANALYSIS_TIMEOUT_SECONDS", raising=False)
        s, error = load_settings()
        assert s.history_limit == 6
        assert error is None
