"""Provider Adapters: protocol-level handling for each backend.

Each adapter translates a PromptEnvelope into the provider's HTTP protocol,
sends it once, and returns a CallOutcome. Adapters never retry; that is the
retry engine's job.

Provider-specific behaviors:
  - Gemini: generateContent, key in query string, system text sent as a
    leading "model" turn, text taken from the first candidate
  - OpenAI: chat completions with a bearer header, fixed temperature
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from spendwise.gateway.types import CallOutcome, FailureKind, PromptEnvelope, Provider

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


class BaseProviderAdapter(ABC):
    """Base class for all provider adapters."""

    provider: Provider

    def __init__(
        self,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs,
    ):
        self.api_key = api_key
        self._transport = transport

    @abstractmethod
    async def send(
        self,
        envelope: PromptEnvelope,
        model: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> CallOutcome:
        """Send one request to the provider and return its outcome."""
        ...

    @abstractmethod
    def extract_text(self, data: dict) -> str:
        """Pull the reply text out of a successful response body."""
        ...

    async def _post(self, url: str, payload: dict, timeout: float, **kwargs) -> CallOutcome:
        """POST ``payload`` and turn the HTTP exchange into an outcome."""
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json", **kwargs.pop("headers", {})},
                    **kwargs,
                )
        except httpx.TimeoutException:
            return CallOutcome.failure(FailureKind.TIMEOUT, f"Request timeout after {timeout:g} seconds")
        except httpx.HTTPError as e:
            return CallOutcome.failure(FailureKind.NETWORK_FAULT, self._redact(str(e) or type(e).__name__))

        if resp.status_code == 429:
            return CallOutcome.failure(FailureKind.RATE_LIMITED, f"429 Rate limited by {self.provider.value}")

        try:
            data = resp.json()
        except ValueError:
            return CallOutcome.failure(
                FailureKind.NETWORK_FAULT,
                f"Unreadable response from {self.provider.value} (HTTP {resp.status_code})",
            )

        if not isinstance(data, dict):
            return CallOutcome.failure(
                FailureKind.NETWORK_FAULT,
                f"Unexpected response from {self.provider.value} (HTTP {resp.status_code})",
            )

        error = data.get("error")
        if error:
            return CallOutcome.failure(
                FailureKind.PROVIDER_ERROR,
                self._redact(_error_message(error, resp.status_code)),
            )

        text = self.extract_text(data)
        if not text:
            return CallOutcome.empty()
        return CallOutcome.ok(text)

    def _redact(self, message: str) -> str:
        """Strip the credential from text that may reach logs or the user."""
        if self.api_key and self.api_key in message:
            return message.replace(self.api_key, "***")
        return message


def _error_message(error: dict | str, status_code: int) -> str:
    """Render a provider error payload as one line of text.

    Gemini puts the canonical status (e.g. NOT_FOUND) beside the message, so
    it is appended when the message does not already mention it.
    """
    if not isinstance(error, dict):
        return str(error)
    message = str(error.get("message") or f"HTTP {status_code}")
    status = error.get("status")
    if status and str(status) not in message:
        message = f"{message} ({status})"
    return message


# ---------------------------------------------------------------------------
# Gemini Adapter (Google AI)
# ---------------------------------------------------------------------------


class GeminiAdapter(BaseProviderAdapter):
    """Google Gemini generateContent adapter."""

    provider = Provider.GEMINI
    api_url_template = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    async def send(
        self,
        envelope: PromptEnvelope,
        model: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> CallOutcome:
        contents = []
        if envelope.system_message:
            contents.append({"role": "model", "parts": [{"text": envelope.system_message}]})
        contents.append({"role": "user", "parts": [{"text": envelope.user_message}]})

        return await self._post(
            self.api_url_template.format(model=model),
            {"contents": contents},
            timeout,
            params={"key": self.api_key},
        )

    def extract_text(self, data: dict) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if parts and parts[0].get("text"):
            return parts[0]["text"]
        return "\n".join(p.get("text", "") for p in parts if p.get("text"))


# ---------------------------------------------------------------------------
# OpenAI Adapter
# ---------------------------------------------------------------------------


class OpenAIAdapter(BaseProviderAdapter):
    """OpenAI Chat Completions adapter."""

    provider = Provider.OPENAI
    api_url = "https://api.openai.com/v1/chat/completions"

    def __init__(self, api_key: str, temperature: float = 0.4, **kwargs):
        super().__init__(api_key=api_key, **kwargs)
        self.temperature = temperature

    async def send(
        self,
        envelope: PromptEnvelope,
        model: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> CallOutcome:
        messages = []
        if envelope.system_message:
            messages.append({"role": "system", "content": envelope.system_message})
        messages.append({"role": "user", "content": envelope.user_message})

        payload = {
            "model": model,
            "messages": messages,
            "temperature": self.temperature,
        }
        return await self._post(
            self.api_url,
            payload,
            timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    def extract_text(self, data: dict) -> str:
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""


# ---------------------------------------------------------------------------
# Adapter registry
# ---------------------------------------------------------------------------

ADAPTER_REGISTRY: dict[Provider, type[BaseProviderAdapter]] = {
    Provider.GEMINI: GeminiAdapter,
    Provider.OPENAI: OpenAIAdapter,
}


def get_adapter(provider: Provider, api_key: str, **kwargs) -> BaseProviderAdapter:
    """Factory: get the appropriate adapter for a provider."""
    cls = ADAPTER_REGISTRY.get(provider)
    if cls is None:
        raise ValueError(f"No adapter registered for provider: {provider}")
    return cls(api_key=api_key, **kwargs)
