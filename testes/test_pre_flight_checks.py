import pytest
import requests

from rich_text_migrator.utils import pre_flight_checks
from rich_text_migrator.utils.pre_flight_checks import PreFlightCheckError, run_kontent_pre_flight_checks

CONFIG = {
    "kontent": {"environment_id": "env-1", "api_key": "secret", "base_url": "https://manage.test/v2"},
    "migration": {"content_type_codename": "article"},
}


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


def fake_get(statuses, seen):
    def get(url, headers, timeout):
        seen.append((url, headers))
        return FakeResponse(statuses.pop(0))

    return get


def test_checks_pass(monkeypatch):
    seen = []
    monkeypatch.setattr(pre_flight_checks.requests, "get", fake_get([200, 200], seen))
    run_kontent_pre_flight_checks(CONFIG)
    assert [url for url, _ in seen] == [
        "https://manage.test/v2/projects/env-1/languages",
        "https://manage.test/v2/projects/env-1/types/codename/article",
    ]
    assert seen[0][1] == {"Authorization": "Bearer secret"}


def test_missing_api_key():
    with pytest.raises(PreFlightCheckError, match="API key"):
        run_kontent_pre_flight_checks({"kontent": {"environment_id": "env-1"}})


def test_invalid_api_key(monkeypatch):
    monkeypatch.setattr(pre_flight_checks.requests, "get", fake_get([401], []))
    with pytest.raises(PreFlightCheckError, match="invalid"):
        run_kontent_pre_flight_checks(CONFIG)


def test_unknown_content_type(monkeypatch):
    monkeypatch.setattr(pre_flight_checks.requests, "get", fake_get([200, 404], []))
    with pytest.raises(PreFlightCheckError, match="'article' does not exist"):
        run_kontent_pre_flight_checks(CONFIG)


def test_network_error(monkeypatch):
    def refuse(url, headers, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(pre_flight_checks.requests, "get", refuse)
    with pytest.raises(PreFlightCheckError, match="Network error"):
        run_kontent_pre_flight_checks(CONFIG)
