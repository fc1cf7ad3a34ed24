"""Dataset API: the saved budgeting data used as default assistant context."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ValidationError

from spendwise.core.dependencies import get_dataset_store
from spendwise.data.reference import Category
from spendwise.gateway.types import BudgetingSnapshot
from spendwise.schemas.assistant import BudgetItemIn, SnapshotIn, TransactionIn
from spendwise.storage.json_store import DatasetStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dataset", tags=["dataset"])


def _valid_entries(model: type[BaseModel], entries: list[dict]) -> list:
    valid = []
    for entry in entries:
        try:
            valid.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning("Dropping saved %s that no longer validates: %d error(s)", model.__name__, e.error_count())
    return valid


def _to_payload(snapshot: BudgetingSnapshot) -> SnapshotIn:
    return SnapshotIn(
        salary=max(snapshot.salary, 0),
        budgets=_valid_entries(
            BudgetItemIn,
            [{"category": b.category, "plannedAmount": b.planned_amount} for b in snapshot.budgets],
        ),
        transactions=_valid_entries(
            TransactionIn,
            [
                {"date": t.date, "amount": t.amount, "category": t.category, "type": t.type, "note": t.note}
                for t in snapshot.transactions
            ],
        ),
    )


@router.get("", response_model=SnapshotIn)
async def get_dataset(datasets: DatasetStore = Depends(get_dataset_store)):
    """Saved salary, budgets and transactions. Malformed entries are dropped."""
    return _to_payload(BudgetingSnapshot.from_dict(datasets.load()))


@router.put("", response_model=SnapshotIn)
async def save_dataset(payload: SnapshotIn, datasets: DatasetStore = Depends(get_dataset_store)):
    datasets.save(payload.model_dump(mode="json"))
    logger.info("Saved dataset: %d budgets, %d transactions", len(payload.budgets), len(payload.transactions))
    return payload


@router.get("/categories")
async def list_categories():
    """Budget categories offered in pickers."""
    return [c.value for c in Category]
