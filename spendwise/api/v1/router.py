from fastapi import APIRouter

from spendwise.api.v1.assistant import router as assistant_router
from spendwise.api.v1.dataset import router as dataset_router
from spendwise.api.v1.exchange import router as exchange_router
from spendwise.api.v1.settings import router as settings_router

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(assistant_router)
api_v1_router.include_router(dataset_router)
api_v1_router.include_router(settings_router)
api_v1_router.include_router(exchange_router)
