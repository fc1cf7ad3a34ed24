"""Settings API: manage the AI API key and model preference."""

from fastapi import APIRouter, Depends, HTTPException, status

from spendwise.core.dependencies import get_api_key_store, get_model_store
from spendwise.gateway.router import GEMINI_DEFAULT_MODEL, GEMINI_MODELS, classify
from spendwise.schemas.settings import ApiKeyStatus, ApiKeyUpdate, ModelOptions, ModelSetting
from spendwise.storage.json_store import ApiKeyStore, ModelStore

router = APIRouter(prefix="/settings", tags=["settings"])


def _key_status(api_keys: ApiKeyStore) -> ApiKeyStatus:
    key = api_keys.get()
    if not key:
        return ApiKeyStatus(configured=False)
    return ApiKeyStatus(configured=True, provider=classify(key).provider.value)


@router.get("/api-key", response_model=ApiKeyStatus)
async def get_api_key(api_keys: ApiKeyStore = Depends(get_api_key_store)):
    """Show whether a key is configured (never returns the actual value)."""
    return _key_status(api_keys)


@router.put("/api-key", response_model=ApiKeyStatus)
async def update_api_key(payload: ApiKeyUpdate, api_keys: ApiKeyStore = Depends(get_api_key_store)):
    if not payload.api_key.strip():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="API key must not be blank")
    api_keys.set(payload.api_key)
    return _key_status(api_keys)


@router.delete("/api-key", status_code=status.HTTP_204_NO_CONTENT)
async def delete_api_key(api_keys: ApiKeyStore = Depends(get_api_key_store)):
    api_keys.remove()


@router.get("/models", response_model=ModelOptions)
async def list_models():
    """Gemini models offered in settings. OpenAI keys always use their fixed model."""
    return ModelOptions(models=list(GEMINI_MODELS), default=GEMINI_DEFAULT_MODEL)


@router.get("/model", response_model=ModelSetting)
async def get_model(models: ModelStore = Depends(get_model_store)):
    return ModelSetting(model=models.get() or GEMINI_DEFAULT_MODEL)


@router.put("/model", response_model=ModelSetting)
async def update_model(payload: ModelSetting, models: ModelStore = Depends(get_model_store)):
    try:
        models.set(payload.model)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return ModelSetting(model=payload.model)
