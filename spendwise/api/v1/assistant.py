"""Assistant API: chat completions and one-shot budgeting tips."""

from fastapi import APIRouter, Depends

from spendwise.core.dependencies import get_dataset_store, get_gateway
from spendwise.gateway.errors import GENERIC_ERROR_PREFIX
from spendwise.gateway.gateway import AiGateway
from spendwise.gateway.types import BudgetingSnapshot
from spendwise.schemas.assistant import AssistantReply, CompletionRequest, InsightRequest, SnapshotIn
from spendwise.storage.json_store import DatasetStore

router = APIRouter(prefix="/assistant", tags=["assistant"])


def _reply(text: str) -> AssistantReply:
    return AssistantReply(text=text, is_error=text.startswith(GENERIC_ERROR_PREFIX))


def _snapshot(payload_snapshot: SnapshotIn | None, datasets: DatasetStore) -> BudgetingSnapshot:
    if payload_snapshot is not None:
        return payload_snapshot.to_snapshot()
    return BudgetingSnapshot.from_dict(datasets.load())


@router.post("/complete", response_model=AssistantReply)
async def complete(
    payload: CompletionRequest,
    gateway: AiGateway = Depends(get_gateway),
    datasets: DatasetStore = Depends(get_dataset_store),
):
    """Answer a chat message, optionally with the budgeting summary as context.

    Always 200: failures come back as readable text in ``text``.
    """
    if payload.include_context:
        text = await gateway.complete_with_context(
            _snapshot(payload.snapshot, datasets),
            payload.text,
            credential_override=payload.api_key,
            model_override=payload.model,
        )
    else:
        text = await gateway.complete(payload.text, credential_override=payload.api_key, model_override=payload.model)
    return _reply(text)


@router.post("/insight", response_model=AssistantReply)
async def insight(
    payload: InsightRequest,
    gateway: AiGateway = Depends(get_gateway),
    datasets: DatasetStore = Depends(get_dataset_store),
):
    """Three short tips about the user's spending."""
    text = await gateway.get_insight(
        _snapshot(payload.snapshot, datasets),
        credential_override=payload.api_key,
        model_override=payload.model,
    )
    return _reply(text)
