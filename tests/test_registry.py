import pytest
import requests

from npm_advisor import registry
from npm_advisor.registry import RegistryError, fetch_latest_stable, package_url, select_stable


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


def _packument(latest, versions):
    return {"dist-tags": {"latest": latest}, "versions": {v: {} for v in versions}}


def test_package_url_encodes_scoped_names():
    assert package_url("left-pad") == "https://registry.npmjs.org/left-pad"
    assert package_url("@scope/pkg", "https://npm.example.com/") == (
        "https://npm.example.com/@scope%2Fpkg"
    )


def test_select_stable_prefers_latest_tag():
    assert select_stable(_packument("2.1.0", ["1.0.0", "2.1.0", "3.0.0-rc.1"])) == "2.1.0"


def test_select_stable_skips_prerelease_latest_tag():
    doc = _packument("3.0.0-rc.1", ["2.0.0", "2.10.0", "2.9.1", "3.0.0-rc.1"])
    assert select_stable(doc) == "2.10.0"


def test_select_stable_without_releases():
    assert select_stable(_packument("1.0.0-beta", ["1.0.0-beta", "garbage"])) is None
    assert select_stable({}) is None


def test_fetch_latest_stable(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(payload=_packument("4.17.21", ["4.17.20", "4.17.21"]))

    monkeypatch.setattr(registry, "_http_get", fake_get)

    assert fetch_latest_stable("lodash", "https://registry.example.com", timeout=5) == "4.17.21"
    assert calls == [("https://registry.example.com/lodash", 5)]


@pytest.mark.parametrize(
    "response, message",
    [
        (_FakeResponse(status_code=404), "not found"),
        (_FakeResponse(status_code=500), "Unexpected status code 500"),
        (_FakeResponse(invalid_json=True), "Invalid JSON"),
        (_FakeResponse(payload=["not", "a", "dict"]), "Unexpected registry payload"),
        (_FakeResponse(payload=_packument("1.0.0-rc.1", ["1.0.0-rc.1"])), "No stable version"),
    ],
)
def test_fetch_latest_stable_errors(monkeypatch, response, message):
    monkeypatch.setattr(registry, "_http_get", lambda url, timeout: response)

    with pytest.raises(RegistryError, match=message):
        fetch_latest_stable("missing")


def test_fetch_latest_stable_transport_failure(monkeypatch):
    def failing_get(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(registry, "_http_get", failing_get)

    with pytest.raises(RegistryError, match="Failed to fetch registry data for lodash"):
        fetch_latest_stable("lodash")
