"""Shared fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from helpers import FakeClock, FakeSleeper, ScriptedTransport, gemini_body
from spendwise.core.dependencies import get_api_key_store, get_dataset_store, get_gateway, get_model_store
from spendwise.gateway.gateway import AiGateway
from spendwise.gateway.throttle import ThrottleGate
from spendwise.gateway.types import BudgetingSnapshot, BudgetItem, Transaction, TransactionType
from spendwise.main import app
from spendwise.storage import open_stores


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeper(clock) -> FakeSleeper:
    return FakeSleeper(clock)


@pytest.fixture
def snapshot() -> BudgetingSnapshot:
    return BudgetingSnapshot(
        salary=5000,
        budgets=(BudgetItem(category="Food", planned_amount=600),),
        transactions=(Transaction(date="2024-01-01", amount=50, category="Food", type=TransactionType.EXPENSE, note=""),),
    )


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------


@pytest.fixture
def stores(tmp_path):
    """API key, model and dataset stores over a temporary directory."""
    return open_stores(tmp_path)


@pytest.fixture
def provider() -> ScriptedTransport:
    """Provider transport used by the API gateway; tests may replace ``replies``."""
    return ScriptedTransport((200, gemini_body("Cut back on dining out.")))


@pytest.fixture
def gateway(stores, provider) -> AiGateway:
    api_keys, models, _ = stores
    return AiGateway(
        credential_store=api_keys,
        model_store=models,
        gate=ThrottleGate(min_gap=0),
        transport=provider,
        sleep=FakeSleeper(),
    )


@pytest.fixture
async def client(stores, gateway) -> AsyncGenerator[AsyncClient, None]:
    api_keys, models, datasets = stores
    app.dependency_overrides[get_api_key_store] = lambda: api_keys
    app.dependency_overrides[get_model_store] = lambda: models
    app.dependency_overrides[get_dataset_store] = lambda: datasets
    app.dependency_overrides[get_gateway] = lambda: gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
