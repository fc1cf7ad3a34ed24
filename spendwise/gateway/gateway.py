"""AI Gateway: public entry points integrating all gateway components.

Flow for every call:
  1. Resolve the credential (override or stored); none → fixed message
  2. Throttle Gate admits or rejects (rejection → "please wait" message)
  3. Provider Router picks the backend and model
  4. Retry Engine runs attempts, each raced against the provider deadline
  5. The final outcome is rendered once: text, empty fallback, or a
     classified error message

Usage:
    gateway = AiGateway(credential_store=api_keys, model_store=models)

    text = await gateway.complete("How do I save more?")
    text = await gateway.complete_with_context(snapshot, "Where did my money go?")
    tips = await gateway.get_insight(snapshot)

No entry point raises: every failure comes back as a display string.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

from spendwise.core.metrics import AI_CALL_DURATION, AI_CALLS, AI_THROTTLE_REJECTIONS
from spendwise.gateway.errors import BUSY_MESSAGE, MISSING_CREDENTIAL_MESSAGE, TIMEOUT_MESSAGE, classify_failure
from spendwise.gateway.prompt_builder import ASSISTANT_PERSONA, build_context_system_message, build_insight_prompt
from spendwise.gateway.providers import DEFAULT_TIMEOUT_SECONDS, BaseProviderAdapter, get_adapter
from spendwise.gateway.retry import DEFAULT_MAX_ATTEMPTS, Sleep, race_with_timeout, with_retry
from spendwise.gateway.router import resolve_route
from spendwise.gateway.throttle import ThrottleGate
from spendwise.gateway.types import BudgetingSnapshot, CallOutcome, PromptEnvelope, ProviderRoute
from spendwise.storage.interface import CredentialStore, ModelPreferenceStore

logger = logging.getLogger(__name__)

EMPTY_REPLY_MESSAGE = "No response"
EMPTY_INSIGHT_MESSAGE = "Keep tracking your expenses to see insights!"
DEFAULT_INSIGHT_TIMEOUT_SECONDS = 10.0


class AiGateway:
    """Single-flight, retrying client for the two supported AI providers.

    Integrates:
      - ThrottleGate: one call at a time, minimum gap between starts
      - Provider Router: credential shape → provider and model
      - Provider Adapters: protocol-specific HTTP calls
      - Retry Engine + Timeout Race: backoff and hard deadlines
      - Error Classifier: failure → user-facing message
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        model_store: ModelPreferenceStore | None = None,
        gate: ThrottleGate | None = None,
        provider_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        insight_timeout: float = DEFAULT_INSIGHT_TIMEOUT_SECONDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        temperature: float = 0.4,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            credential_store: Source of the stored API key (read once per call)
            model_store: Source of the stored Gemini model preference
            gate: Shared throttle gate; a private one is created if omitted
            provider_timeout: Deadline for each outbound provider call (seconds)
            insight_timeout: Caller-side deadline around get_insight (seconds)
            max_attempts: Attempts per call, including the first
            temperature: Sampling temperature for OpenAI-compatible calls
            transport: Optional httpx transport handed to every adapter
            sleep: Delay function used for backoff
        """
        self.credential_store = credential_store
        self.model_store = model_store
        self.gate = gate or ThrottleGate()
        self.provider_timeout = provider_timeout
        self.insight_timeout = insight_timeout
        self.max_attempts = max_attempts
        self.temperature = temperature
        self._transport = transport
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    async def complete(
        self,
        text: str,
        credential_override: str | None = None,
        model_override: str | None = None,
    ) -> str:
        """Answer a plain prompt with the assistant persona as system message."""
        envelope = PromptEnvelope(user_message=text, system_message=ASSISTANT_PERSONA)
        return await self._run(envelope, credential_override, model_override, EMPTY_REPLY_MESSAGE)

    async def complete_with_context(
        self,
        snapshot: BudgetingSnapshot,
        text: str,
        credential_override: str | None = None,
        model_override: str | None = None,
    ) -> str:
        """Answer a prompt with the user's budgeting summary in the system message."""
        envelope = PromptEnvelope(user_message=text, system_message=build_context_system_message(snapshot))
        return await self._run(envelope, credential_override, model_override, EMPTY_REPLY_MESSAGE)

    async def get_insight(
        self,
        snapshot: BudgetingSnapshot,
        credential_override: str | None = None,
        model_override: str | None = None,
    ) -> str:
        """Ask for three short coaching tips about the snapshot.

        Bounded by ``insight_timeout``. When that deadline passes the attempt
        sequence is cancelled, which aborts the HTTP request and frees the
        throttle slot.
        """
        envelope = PromptEnvelope(user_message=build_insight_prompt(snapshot))
        return await self._run(
            envelope,
            credential_override,
            model_override,
            EMPTY_INSIGHT_MESSAGE,
            outer_timeout=self.insight_timeout,
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _resolve_credential(self, override: str | None) -> str:
        if override:
            return override.strip()
        try:
            return (self.credential_store.get() or "").strip()
        except Exception as e:
            logger.warning("Failed to load API key: %s", type(e).__name__)
            return ""

    def _stored_model(self) -> str:
        if self.model_store is None:
            return ""
        try:
            return self.model_store.get() or ""
        except Exception as e:
            logger.warning("Failed to load AI model preference: %s", type(e).__name__)
            return ""

    def _adapter_for(self, route: ProviderRoute, credential: str) -> BaseProviderAdapter:
        return get_adapter(
            route.provider,
            credential,
            transport=self._transport,
            temperature=self.temperature,
        )

    async def _run(
        self,
        envelope: PromptEnvelope,
        credential_override: str | None,
        model_override: str | None,
        empty_message: str,
        outer_timeout: float | None = None,
    ) -> str:
        credential = self._resolve_credential(credential_override)
        if not credential:
            return MISSING_CREDENTIAL_MESSAGE

        # Admission happens before the first await so back-to-back calls are
        # rejected without yielding to the event loop.
        if not self.gate.try_admit():
            AI_THROTTLE_REJECTIONS.inc()
            return BUSY_MESSAGE

        try:
            route = resolve_route(credential, model_override, self._stored_model())
            dispatch = self._dispatch(envelope, route, credential)
            if outer_timeout is None:
                outcome = await dispatch
            else:
                try:
                    outcome = await asyncio.wait_for(dispatch, timeout=outer_timeout)
                except asyncio.TimeoutError:
                    logger.warning("AI request gave up after %gs caller deadline", outer_timeout)
                    return TIMEOUT_MESSAGE
            return self._render(outcome, empty_message)
        except Exception:
            logger.exception("AI request failed unexpectedly")
            return classify_failure(None, "Unexpected error contacting AI.")
        finally:
            self.gate.release()

    async def _dispatch(self, envelope: PromptEnvelope, route: ProviderRoute, credential: str) -> CallOutcome:
        adapter = self._adapter_for(route, credential)
        start = time.monotonic()

        async def attempt() -> CallOutcome:
            return await race_with_timeout(
                adapter.send(envelope, route.model, timeout=self.provider_timeout),
                self.provider_timeout,
            )

        outcome = await with_retry(attempt, max_attempts=self.max_attempts, sleep=self._sleep)

        label = outcome.kind.value if outcome.is_failure else outcome.status.value
        AI_CALLS.labels(provider=route.provider.value, outcome=label).inc()
        AI_CALL_DURATION.labels(provider=route.provider.value).observe(time.monotonic() - start)
        logger.info(
            "AI request to %s (%s) finished: %s after %d attempt(s)",
            route.provider.value,
            route.model,
            label,
            outcome.attempts,
            extra={"provider": route.provider.value, "model": route.model},
        )
        return outcome

    @staticmethod
    def _render(outcome: CallOutcome, empty_message: str) -> str:
        if outcome.is_text:
            return outcome.text
        if outcome.is_empty:
            return empty_message
        logger.error("AI request failed: %s", outcome.message)
        return classify_failure(outcome.kind, outcome.message)
