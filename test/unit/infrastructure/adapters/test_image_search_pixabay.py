import pytest
import requests

import app.infrastructure.adapters.image_search_pixabay as px
from app.core.config import settings
from app.core.exceptions import ConfigurationError, ProviderError
from app.infrastructure.adapters.image_search_pixabay import PixabayImageSearch


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._bad_json = bad_json

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._bad_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


HIT = {
    "id": 195893,
    "webformatURL": "https://pixabay.com/get/35bbf209e1_640.jpg",
    "previewURL": "https://cdn.pixabay.com/photo/2013/10/15/09/12/flower-195893_150.jpg",
    "largeImageURL": "https://pixabay.com/get/ed6a99fd0a76647_1280.jpg",
    "webformatWidth": 640,
    "webformatHeight": 360,
    "tags": "blossom, bloom, flower",
    "likes": 1063,
    "downloads": 6439,
    "user": "Josch13",
}


@pytest.mark.adapters
def test_search_sends_fixed_filters_and_maps_hits(monkeypatch):
    captured = {}

    def fake_get(url, params=None, timeout=None):
        captured.update(url=url, params=params, timeout=timeout)
        return FakeResponse(payload={"total": 1, "totalHits": 1, "hits": [HIT]})

    monkeypatch.setattr(px.requests, "get", fake_get)
    adapter = PixabayImageSearch(api_key="test-key")

    images = adapter.search("happy person smiling joy", 30)

    assert captured["url"] == "https://pixabay.com/api/"
    assert captured["timeout"] == 10.0
    params = captured["params"]
    assert params["key"] == "test-key"
    assert params["q"] == "happy person smiling joy"
    assert params["per_page"] == 30
    assert params["image_type"] == "photo"
    assert params["orientation"] == "horizontal"
    assert params["safesearch"] == "true"
    assert params["order"] == "popular"
    assert (params["min_width"], params["min_height"]) == (800, 600)

    assert len(images) == 1
    img = images[0]
    assert img.id == 195893
    assert img.url == HIT["webformatURL"]
    assert img.preview_url == HIT["previewURL"]
    assert img.large_url == HIT["largeImageURL"]
    assert (img.width, img.height) == (640, 360)
    assert (img.likes, img.downloads) == (1063, 6439)
    assert img.user == "Josch13"
    assert img.alt_text == "happy person smiling joy - blossom, bloom, flower"


@pytest.mark.adapters
@pytest.mark.parametrize("requested, sent", [(1, 3), (50, 50), (500, 200)])
def test_per_page_is_clamped(requested, sent):
    session = FakeSession(FakeResponse(payload={"hits": []}))
    PixabayImageSearch(api_key="k", session=session).search("calm", requested)
    assert session.calls[0]["params"]["per_page"] == sent


@pytest.mark.adapters
def test_empty_hits_is_not_an_error():
    session = FakeSession(FakeResponse(payload={"total": 0, "hits": []}))
    assert PixabayImageSearch(api_key="k", session=session).search("zzz", 30) == []


@pytest.mark.adapters
def test_hits_without_url_are_skipped():
    broken = {**HIT, "id": 2, "webformatURL": None}
    session = FakeSession(FakeResponse(payload={"hits": [broken, HIT]}))
    images = PixabayImageSearch(api_key="k", session=session).search("flower", 30)
    assert [img.id for img in images] == [195893]


@pytest.mark.adapters
def test_missing_api_key_raises_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "pixabay_api_key", "")
    session = FakeSession(FakeResponse(payload={"hits": [HIT]}))
    adapter = PixabayImageSearch(session=session)

    with pytest.raises(ConfigurationError) as exc_info:
        adapter.ensure_configured()
    assert exc_info.value.config_key == "pixabay_api_key"

    with pytest.raises(ConfigurationError):
        adapter.search("joy", 30)
    assert session.calls == []


@pytest.mark.adapters
def test_non_success_status_raises_provider_error():
    session = FakeSession(FakeResponse(status_code=429))
    with pytest.raises(ProviderError) as exc_info:
        PixabayImageSearch(api_key="k", session=session).search("joy", 30)
    assert exc_info.value.status_code == 429
    assert exc_info.value.search_term == "joy"
    assert exc_info.value.error_code == "PROVIDER_ERROR"


@pytest.mark.adapters
@pytest.mark.parametrize(
    "exc",
    [requests.Timeout("read timed out"), requests.ConnectionError("connection refused")],
)
def test_network_failures_raise_provider_error(exc):
    session = FakeSession(exc=exc)
    with pytest.raises(ProviderError) as exc_info:
        PixabayImageSearch(api_key="k", session=session, timeout=2).search("joy", 30)
    assert exc_info.value.status_code is None
    assert session.calls[0]["timeout"] == 2.0


@pytest.mark.adapters
def test_invalid_json_raises_provider_error():
    session = FakeSession(FakeResponse(bad_json=True))
    with pytest.raises(ProviderError):
        PixabayImageSearch(api_key="k", session=session).search("joy", 30)
