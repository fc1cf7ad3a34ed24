"""Tests for the assistant endpoints."""

import pytest
from httpx import AsyncClient

from spendwise.gateway.errors import MISSING_CREDENTIAL_MESSAGE
from spendwise.gateway.gateway import EMPTY_INSIGHT_MESSAGE

GEMINI_KEY = "AIzaSyTestKey123"


@pytest.mark.asyncio
async def test_complete_without_key(client: AsyncClient, provider):
    """No stored key: readable message, no provider traffic."""
    response = await client.post("/api/v1/assistant/complete", json={"text": "Hi"})
    assert response.status_code == 200
    assert response.json() == {"text": MISSING_CREDENTIAL_MESSAGE, "is_error": False}
    assert provider.call_count == 0


@pytest.mark.asyncio
async def test_complete_with_stored_key(client: AsyncClient, stores, provider):
    stores[0].set(GEMINI_KEY)

    response = await client.post("/api/v1/assistant/complete", json={"text": "How do I save?"})

    assert response.status_code == 200
    assert response.json()["text"] == "Cut back on dining out."
    assert provider.requests[0].url.params["key"] == GEMINI_KEY


@pytest.mark.asyncio
async def test_complete_with_key_override(client: AsyncClient, provider):
    response = await client.post(
        "/api/v1/assistant/complete",
        json={"text": "Hi", "api_key": GEMINI_KEY, "model": "gemini-1.5-flash"},
    )
    assert response.status_code == 200
    assert "gemini-1.5-flash:generateContent" in provider.requests[0].url.path


@pytest.mark.asyncio
async def test_complete_with_inline_context(client: AsyncClient, stores, provider):
    stores[0].set(GEMINI_KEY)

    response = await client.post(
        "/api/v1/assistant/complete",
        json={
            "text": "Where did my money go?",
            "include_context": True,
            "snapshot": {
                "salary": 3200,
                "budgets": [{"category": "Food", "plannedAmount": 400}],
                "transactions": [{"date": "2024-03-02", "amount": 18.5, "category": "Food", "note": "Pizza"}],
            },
        },
    )

    assert response.status_code == 200
    system_text = provider.last_json()["contents"][0]["parts"][0]["text"]
    assert "Salary: 3200" in system_text
    assert "- 2024-03-02: 18.5 for Pizza" in system_text


@pytest.mark.asyncio
async def test_complete_with_stored_context(client: AsyncClient, stores, provider):
    api_keys, _, datasets = stores
    api_keys.set(GEMINI_KEY)
    datasets.save({"salary": 7000, "budgets": [], "transactions": []})

    await client.post("/api/v1/assistant/complete", json={"text": "Hi", "include_context": True})

    system_text = provider.last_json()["contents"][0]["parts"][0]["text"]
    assert "Salary: 7000" in system_text


@pytest.mark.asyncio
async def test_complete_provider_error_flagged(client: AsyncClient, stores, provider):
    stores[0].set(GEMINI_KEY)
    provider.replies = [(400, {"error": {"message": "API key not valid", "status": "INVALID_ARGUMENT"}})]

    response = await client.post("/api/v1/assistant/complete", json={"text": "Hi"})

    assert response.status_code == 200
    data = response.json()
    assert data["is_error"] is True
    assert data["text"] == "AI Error: API key not valid (INVALID_ARGUMENT)"


@pytest.mark.asyncio
async def test_complete_rejects_blank_text(client: AsyncClient):
    response = await client.post("/api/v1/assistant/complete", json={"text": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_insight(client: AsyncClient, stores, provider):
    stores[0].set(GEMINI_KEY)
    provider.replies = [(200, {"candidates": []})]

    response = await client.post(
        "/api/v1/assistant/insight",
        json={"snapshot": {"salary": 5000, "budgets": [{"category": "Food", "plannedAmount": 600}]}},
    )

    assert response.status_code == 200
    assert response.json()["text"] == EMPTY_INSIGHT_MESSAGE
    prompt = provider.last_json()["contents"][0]["parts"][0]["text"]
    assert "Total Planned Budget: 600" in prompt


@pytest.mark.asyncio
async def test_insight_with_malformed_saved_dataset(client: AsyncClient, stores, provider):
    """Bad saved entries are skipped; the route still answers with text."""
    api_keys, _, datasets = stores
    api_keys.set(GEMINI_KEY)
    datasets.save(
        {
            "salary": 2500,
            "budgets": ["Food", {"category": "Fun", "plannedAmount": 80}],
            "transactions": [
                {"date": "2024-04-01", "amount": 12, "category": "Food", "type": "transfer"},
                {"date": "2024-04-02", "amount": "a lot", "category": "Food"},
                {"date": "2024-04-03", "amount": 9, "category": "Coffee"},
            ],
        }
    )

    response = await client.post("/api/v1/assistant/insight", json={})

    assert response.status_code == 200
    assert response.json()["text"] == "Cut back on dining out."
    prompt = provider.last_json()["contents"][0]["parts"][0]["text"]
    assert "Salary: 2500" in prompt
    assert "- Fun: 80" in prompt
    assert "- 2024-04-03: 9 for Coffee" in prompt
    assert "2024-04-01" not in prompt


@pytest.mark.asyncio
async def test_context_uses_dataset_saved_through_api(client: AsyncClient, stores, provider):
    stores[0].set(GEMINI_KEY)
    await client.put("/api/v1/dataset", json={"salary": 4100, "budgets": [{"category": "Housing", "plannedAmount": 1300}]})

    await client.post("/api/v1/assistant/complete", json={"text": "Hi", "include_context": True})

    system_text = provider.last_json()["contents"][0]["parts"][0]["text"]
    assert "Salary: 4100" in system_text
    assert "- Housing: 1300" in system_text
