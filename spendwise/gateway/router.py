"""Provider Router: picks the backend and model for a credential.

Credentials starting with ``sk-`` (any case) go to the OpenAI-compatible
backend, which always uses its one fixed model. Everything else goes to the
Gemini-compatible backend, whose model is the caller override, else the
stored user preference, else GEMINI_DEFAULT_MODEL.
"""

from __future__ import annotations

from spendwise.gateway.types import Provider, ProviderRoute

GEMINI_DEFAULT_MODEL = "gemini-2.5-flash-lite"
OPENAI_MODEL = "gpt-4o-mini"

# Models offered in settings for Gemini keys
GEMINI_MODELS: tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-1.5-flash-001",
    "gemini-2.0-flash",
    "gemini-2.5-flash-lite",
    "gemini-1.5-flash-8b",
)

_OPENAI_PREFIX = "sk-"


def classify(credential: str) -> ProviderRoute:
    """Map a credential to its provider and that provider's default model."""
    if credential.lower().startswith(_OPENAI_PREFIX):
        return ProviderRoute(provider=Provider.OPENAI, model=OPENAI_MODEL)
    return ProviderRoute(provider=Provider.GEMINI, model=GEMINI_DEFAULT_MODEL)


def resolve_route(
    credential: str,
    model_override: str | None = None,
    stored_model: str | None = None,
) -> ProviderRoute:
    """Resolve the effective provider and model for one call."""
    route = classify(credential)
    if route.provider == Provider.OPENAI:
        return route
    return ProviderRoute(provider=route.provider, model=model_override or stored_model or route.model)
