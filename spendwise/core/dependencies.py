"""FastAPI dependencies: process-wide stores, throttle gate and gateway."""

from functools import lru_cache

from spendwise.core.config import settings
from spendwise.gateway.gateway import AiGateway
from spendwise.gateway.throttle import ThrottleGate
from spendwise.storage.json_store import ApiKeyStore, DatasetStore, ModelStore, open_stores


@lru_cache
def _stores() -> tuple[ApiKeyStore, ModelStore, DatasetStore]:
    return open_stores(settings.data_dir)


def get_api_key_store() -> ApiKeyStore:
    return _stores()[0]


def get_model_store() -> ModelStore:
    return _stores()[1]


def get_dataset_store() -> DatasetStore:
    return _stores()[2]


@lru_cache
def get_gateway() -> AiGateway:
    """One gateway, and so one throttle gate, per process."""
    return AiGateway(
        credential_store=get_api_key_store(),
        model_store=get_model_store(),
        gate=ThrottleGate(min_gap=settings.throttle_min_gap_seconds),
        provider_timeout=settings.provider_timeout_seconds,
        insight_timeout=settings.insight_timeout_seconds,
        max_attempts=settings.max_attempts,
        temperature=settings.openai_temperature,
    )
