import pytest
from fastapi.testclient import TestClient

from chat_proxy.cors import resolve_allowed_origin
from chat_proxy.main import create_app


@pytest.mark.parametrize(
    "origin,allowed,expected",
    [
        ("https://a.example", ["*"], "https://a.example"),
        (None, ["*"], "*"),
        ("https://b.example", ["https://a.example", "https://b.example"], "https://b.example"),
        ("https://evil.example", ["https://a.example", "https://b.example"], "https://a.example"),
        (None, ["https://a.example"], "https://a.example"),
    ],
    ids=["wildcard_echo", "wildcard_no_origin", "listed", "unlisted_fallback", "no_origin_fallback"],
)
def test_resolve_allowed_origin(origin, allowed, expected):
    assert resolve_allowed_origin(origin, allowed) == expected


def test_allow_list_applies_to_preflight_and_responses(settings, upstream):
    restricted = settings.model_copy(update={"allowed_origins": ["https://site.example"]})
    client = TestClient(create_app(restricted, upstream=upstream))

    preflight = client.options("/", headers={"Origin": "https://other.example"})
    welcome = client.get("/", headers={"Origin": "https://site.example"})

    assert preflight.status_code == 204
    assert preflight.headers["access-control-allow-origin"] == "https://site.example"
    assert welcome.headers["access-control-allow-origin"] == "https://site.example"
    assert welcome.headers["vary"] == "Origin"
