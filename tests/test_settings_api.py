"""Tests for the AI settings endpoints."""

import pytest
from httpx import AsyncClient

from spendwise.gateway.router import GEMINI_DEFAULT_MODEL, GEMINI_MODELS


@pytest.mark.asyncio
async def test_api_key_lifecycle(client: AsyncClient, stores):
    response = await client.get("/api/v1/settings/api-key")
    assert response.json() == {"configured": False, "provider": None}

    response = await client.put("/api/v1/settings/api-key", json={"api_key": " sk-live-123 "})
    assert response.status_code == 200
    assert response.json() == {"configured": True, "provider": "openai"}
    assert stores[0].get() == "sk-live-123"

    response = await client.delete("/api/v1/settings/api-key")
    assert response.status_code == 204
    assert stores[0].get() == ""


@pytest.mark.asyncio
async def test_api_key_never_returned(client: AsyncClient):
    await client.put("/api/v1/settings/api-key", json={"api_key": "AIzaSecret"})

    response = await client.get("/api/v1/settings/api-key")

    assert response.json()["provider"] == "gemini"
    assert "AIzaSecret" not in response.text


@pytest.mark.asyncio
async def test_blank_api_key_rejected(client: AsyncClient):
    response = await client.put("/api/v1/settings/api-key", json={"api_key": "   "})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_models(client: AsyncClient):
    response = await client.get("/api/v1/settings/models")
    assert response.json() == {"models": list(GEMINI_MODELS), "default": GEMINI_DEFAULT_MODEL}


@pytest.mark.asyncio
async def test_model_preference(client: AsyncClient, stores):
    response = await client.get("/api/v1/settings/model")
    assert response.json() == {"model": GEMINI_DEFAULT_MODEL}

    response = await client.put("/api/v1/settings/model", json={"model": "gemini-2.0-flash"})
    assert response.status_code == 200
    assert stores[1].get() == "gemini-2.0-flash"

    response = await client.get("/api/v1/settings/model")
    assert response.json() == {"model": "gemini-2.0-flash"}


@pytest.mark.asyncio
async def test_unknown_model_rejected(client: AsyncClient, stores):
    response = await client.put("/api/v1/settings/model", json={"model": "gemini-ultra-9000"})
    assert response.status_code == 422
    assert stores[1].get() == ""
