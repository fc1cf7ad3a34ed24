"""AI settings schemas."""

from pydantic import BaseModel, Field


class ApiKeyStatus(BaseModel):
    configured: bool  # never returns the actual value
    provider: str | None = None


class ApiKeyUpdate(BaseModel):
    api_key: str = Field(..., min_length=1, max_length=512)


class ModelSetting(BaseModel):
    model: str


class ModelOptions(BaseModel):
    models: list[str]
    default: str
