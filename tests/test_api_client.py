"""
Streamlit API client and display helper tests
"""
from types import SimpleNamespace

import pytest
import requests

import api_client
from api_client import (
    APIClient,
    confidence_level,
    confidence_percent,
    format_confidence,
    validate_image
)


class FakeResponse:

    def __init__(self, status_code=200, payload=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.content = content
        self.text = content.decode("utf-8") if content else ""

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


@pytest.fixture
def calls():
    return []


@pytest.fixture
def respond(monkeypatch, calls):
    """Patch requests so every call returns the given response."""

    def _respond(response):
        def fake_request(url, **kwargs):
            calls.append((url, kwargs))
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(api_client.requests, "get", fake_request)
        monkeypatch.setattr(api_client.requests, "post", fake_request)

    return _respond


class TestAPIClient:

    def test_predict_success(self, respond, calls):
        respond(FakeResponse(200, {"condition_label": "Psoriasis", "confidence": 0.6}))

        ok, data = APIClient("http://api/").predict(b"img", "skin.png", "CNN", session_id="s1")

        assert ok
        assert data["condition_label"] == "Psoriasis"
        url, kwargs = calls[0]
        assert url == "http://api/predict"
        assert kwargs["data"] == {"model_type": "CNN", "session_id": "s1"}

    def test_predict_error_detail(self, respond):
        respond(FakeResponse(503, {"detail": "RNN model is not available. Please try another model."}))

        ok, data = APIClient().predict(b"img", "skin.png", "RNN")

        assert not ok
        assert data["status_code"] == 503
        assert data["error"] == "RNN model is not available. Please try another model."

    def test_connection_error(self, respond):
        respond(requests.exceptions.ConnectionError())
        ok, data = APIClient().predict(b"img", "skin.png", "CNN")
        assert not ok
        assert "Cannot connect" in data["error"]

    def test_health_offline(self, respond):
        respond(requests.exceptions.ConnectionError())
        assert APIClient().health_check() == (False, {"error": "Cannot connect to API server"})

    def test_submit_contact(self, respond, calls):
        respond(FakeResponse(201, {"name": "Ann"}))
        ok, _ = APIClient().submit_contact("Ann", "ann@example.com", "Hello")
        assert ok
        assert calls[0][1]["json"]["email"] == "ann@example.com"

    def test_export_contacts_uses_basic_auth(self, respond, calls):
        respond(FakeResponse(200, content=b"Name,Email,Message,Date\n"))

        ok, payload = APIClient().export_contacts("admin", "s3cret")

        assert ok
        assert payload.startswith(b"Name,Email")
        assert calls[0][1]["auth"] == ("admin", "s3cret")

    def test_export_unauthorized(self, respond):
        respond(FakeResponse(401, {"detail": "Invalid admin credentials"}))
        ok, data = APIClient().export_contacts("admin", "nope")
        assert not ok
        assert data["status_code"] == 401


class TestHelpers:

    def test_confidence_percent(self):
        assert confidence_percent(0.604) == 60
        assert format_confidence(0.6) == "60%"

    @pytest.mark.parametrize("percent, level", [(0, "low"), (49, "low"), (50, "medium"), (74, "medium"), (75, "high"), (100, "high")])
    def test_confidence_level(self, percent, level):
        assert confidence_level(percent) == level

    def test_validate_image_ok(self):
        assert validate_image(SimpleNamespace(name="skin.jpg", type="image/jpeg", size=1000)) == (True, "")

    def test_validate_image_missing(self):
        assert validate_image(None) == (False, "Please upload an image first")

    def test_validate_image_not_image(self):
        ok, message = validate_image(SimpleNamespace(name="a.pdf", type="application/pdf", size=10))
        assert not ok
        assert message == "Please upload an image file (JPG, PNG)"

    def test_validate_image_too_large(self):
        ok, message = validate_image(SimpleNamespace(name="a.png", type="image/png", size=6 * 1024 * 1024))
        assert not ok
        assert message == "Image size should be less than 5MB"
