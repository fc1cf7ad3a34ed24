"""Error Classifier: turns failed outcomes into user-facing messages.

Precedence, first match wins:
  1. timeout        → TIMEOUT_MESSAGE
  2. quota / 429    → QUOTA_MESSAGE
  3. NOT_FOUND / 404 → MODEL_NOT_FOUND_MESSAGE
  4. anything else  → "AI Error: <message>"
"""

from __future__ import annotations

from spendwise.gateway.types import FailureKind

MISSING_CREDENTIAL_MESSAGE = "Add an AI API key in Settings to use the assistant."
BUSY_MESSAGE = "Processing... Please wait a second."
TIMEOUT_MESSAGE = "Request timed out. Please check your connection and try again."
QUOTA_MESSAGE = "Quota exceeded. Check your Google AI Studio plan or wait 60 seconds."
MODEL_NOT_FOUND_MESSAGE = "Model not found. Try changing the AI model in Settings."
GENERIC_ERROR_PREFIX = "AI Error: "


def classify_failure(kind: FailureKind | None, raw_message: str) -> str:
    """Map a failure kind and raw message to the message shown to the user."""
    if kind == FailureKind.MISSING_CREDENTIAL:
        return MISSING_CREDENTIAL_MESSAGE
    if kind == FailureKind.TIMEOUT or "timeout" in raw_message:
        return TIMEOUT_MESSAGE
    if "quota" in raw_message or "429" in raw_message:
        return QUOTA_MESSAGE
    if "NOT_FOUND" in raw_message or "404" in raw_message:
        return MODEL_NOT_FOUND_MESSAGE
    return f"{GENERIC_ERROR_PREFIX}{raw_message}"
