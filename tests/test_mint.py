import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from mint_dashboard.main import app
from mint_dashboard.services import mint_client

client = TestClient(app)


class DummySettings:
    mint_url = "http://mint.test"
    mint_timeout_seconds = 5.0


def _use_settings(monkeypatch, settings=DummySettings):
    monkeypatch.setattr(mint_client, "get_settings", lambda: settings())


def test_fetch_mint_info_requests_v1_info(monkeypatch):
    _use_settings(monkeypatch)
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"name": "Test Mint", "version": "0.15.0"})

    data = asyncio.run(mint_client.fetch_mint_info(transport=httpx.MockTransport(handler)))

    assert seen == ["http://mint.test/v1/info"]
    assert data == {"name": "Test Mint", "version": "0.15.0"}


def test_fetch_mint_settings_non_success_raises_upstream_error(monkeypatch):
    _use_settings(monkeypatch)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    with pytest.raises(mint_client.MintUpstreamError, match="/settings status 503"):
        asyncio.run(mint_client.fetch_mint_settings(transport=httpx.MockTransport(handler)))


def test_fetch_timeout_raises_unavailable(monkeypatch):
    _use_settings(monkeypatch)

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(mint_client.MintUnavailableError):
        asyncio.run(mint_client.fetch_mint_info(transport=httpx.MockTransport(handler)))


def test_fetch_invalid_json_raises_unavailable(monkeypatch):
    _use_settings(monkeypatch)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(mint_client.MintUnavailableError):
        asyncio.run(mint_client.fetch_mint_info(transport=httpx.MockTransport(handler)))


def test_fetch_without_mint_url_raises_unavailable(monkeypatch):
    class NoMintSettings(DummySettings):
        mint_url = None

    _use_settings(monkeypatch, NoMintSettings)

    with pytest.raises(mint_client.MintUnavailableError, match="MINT_URL"):
        asyncio.run(mint_client.fetch_mint_info())


def test_mint_info_endpoint_forwards_json(monkeypatch):
    payload = {"name": "Test Mint", "nuts": {"4": {"methods": []}}}

    async def fake_fetch_mint_info():
        return payload

    monkeypatch.setattr(mint_client, "fetch_mint_info", fake_fetch_mint_info)

    response = client.get("/api/mint-info")
    assert response.status_code == 200
    assert response.json() == payload


def test_mint_settings_endpoint_upstream_status_maps_to_500(monkeypatch):
    async def fake_fetch_mint_settings():
        raise mint_client.MintUpstreamError("/settings status 404")

    monkeypatch.setattr(mint_client, "fetch_mint_settings", fake_fetch_mint_settings)

    response = client.get("/api/mint-settings")
    assert response.status_code == 500
    assert response.json() == {"error": "/settings status 404"}


def test_mint_info_endpoint_unavailable_hides_cause(monkeypatch):
    async def fake_fetch_mint_info():
        raise mint_client.MintUnavailableError("request to http://10.0.0.5/v1/info failed")

    monkeypatch.setattr(mint_client, "fetch_mint_info", fake_fetch_mint_info)

    response = client.get("/api/mint-info")
    assert response.status_code == 500
    assert response.json() == {"error": "unexpected"}
