from unittest import mock

import pytest
from fastapi.testclient import TestClient

from zameny.errors import ExtractionError, FetchError
from zameny.main import app, get_replacements_service
from zameny.services.fetcher import HttpClient
from zameny.services.replacements import ReplacementsService


@pytest.fixture
def http_client():
    client = mock.Mock(spec=HttpClient)
    client.fetch_bytes.return_value = "ИС-101, ИС-102\n1 п. X, A, 1\n2 п. Y, B, 2".encode("utf-8")
    return client


@pytest.fixture
def api(http_client):
    app.dependency_overrides[get_replacements_service] = lambda: ReplacementsService(http_client)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_index(api):
    response = api.get("/")
    assert response.status_code == 200
    assert "replacements_url" in response.json()


def test_get_replacements(api, http_client):
    response = api.get("/replacements", params={"url": "https://example.test/z.doc"})
    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "https://example.test/z.doc"
    assert body["groups"] == {"ИС-101": ["1 п. X (A, 1)"], "ИС-102": ["2 п. Y (B, 2)"]}
    assert body["mismatches"] == []
    http_client.fetch_bytes.assert_called_once_with("https://example.test/z.doc")


def test_get_replacements_fetch_error(api, http_client):
    http_client.fetch_bytes.side_effect = FetchError("https://example.test/z.doc", "timeout")
    response = api.get("/replacements")
    assert response.status_code == 502


def test_get_replacements_extraction_error(api, http_client, monkeypatch):
    from zameny.services import replacements

    def broken(payload):
        raise ExtractionError("Empty document")

    monkeypatch.setattr(replacements, "extract_plain_text", broken)
    response = api.get("/replacements")
    assert response.status_code == 422


def test_parse_endpoint(api):
    response = api.post("/replacements/parse", json={"text": "ИС-101\nУП.Заменить на практику"})
    assert response.status_code == 200
    assert response.json()["groups"] == {"ИС-101": ["УП.Заменить на практику"]}
    assert response.json()["source"] is None


def test_parse_endpoint_reports_mismatch(api):
    response = api.post(
        "/replacements/parse",
        json={"text": "ИС-101, ИС-102\n1 п. X, A, 1", "strict": False},
    )
    assert response.status_code == 200
    assert response.json()["mismatches"][0]["unassigned_groups"] == ["ИС-102"]


def test_parse_endpoint_strict_conflict(api):
    response = api.post(
        "/replacements/parse",
        json={"text": "ИС-101, ИС-102\n1 п. X, A, 1", "strict": True},
    )
    assert response.status_code == 409


def test_parse_endpoint_rejects_empty_text(api):
    response = api.post("/replacements/parse", json={"text": "   "})
    assert response.status_code == 400
