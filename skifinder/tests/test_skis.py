from unittest.mock import patch

from fastapi.testclient import TestClient

from skifinder.app import app, get_catalog_config
from skifinder.catalog.config import CatalogConfig

client = TestClient(app)

SAMPLE_RECORDS = [
    {"Artikelomschrijving": "Ski A", "Gender": "Male", "Ability": "advanced", "Piste": "off-piste"},
    {"Artikelomschrijving": "Ski B", "Gender": ["Female", "Unisex"], "Ability": "beginner", "Piste": "on-piste"},
    {"Artikelomschrijving": "Ski C", "Gender": "male", "Ability": ["Advanced", "Expert"], "Piste": "on-piste"},
]


@patch("skifinder.recommendations.retrieval.fetch_catalog", return_value=SAMPLE_RECORDS)
def test_skis_returns_normalized_catalog(mock_fetch):
    resp = client.get("/skis")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert [s["description"] for s in body["skis"]] == ["Ski A", "Ski B", "Ski C"]
    assert body["skis"][0]["product_url"] == "#"


@patch("skifinder.recommendations.retrieval.fetch_catalog", return_value=SAMPLE_RECORDS)
def test_skis_filter_parameters(mock_fetch):
    resp = client.get("/skis", params={"gender": "male", "ability": "advanced"})
    body = resp.json()
    assert [s["description"] for s in body["skis"]] == ["Ski A", "Ski C"]

    resp = client.get("/skis", params={"gender": "unisex"})
    assert [s["description"] for s in resp.json()["skis"]] == ["Ski B"]


def test_skis_unconfigured_credentials():
    app.dependency_overrides[get_catalog_config] = lambda: CatalogConfig(
        backend="baserow", baserow_token="",
    )
    try:
        resp = client.get("/skis")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    body = resp.json()
    assert body["kind"] == "failed"
    assert "not configured" in body["error"]


@patch("skifinder.recommendations.retrieval.fetch_catalog", return_value=SAMPLE_RECORDS)
def test_skis_response_never_contains_credential(mock_fetch):
    app.dependency_overrides[get_catalog_config] = lambda: CatalogConfig(
        backend="airtable", airtable_api_key="key-super-secret", airtable_base_id="appX",
    )
    try:
        resp = client.get("/skis")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    assert "key-super-secret" not in resp.text
    mock_fetch.assert_called_once()


def test_cors_preflight_is_permissive():
    resp = client.options(
        "/skis",
        headers={
            "Origin": "https://wizard.example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


@patch("skifinder.recommendations.retrieval.fetch_catalog", return_value=SAMPLE_RECORDS)
def test_cors_header_on_simple_request(mock_fetch):
    resp = client.get("/skis", headers={"Origin": "https://wizard.example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"
