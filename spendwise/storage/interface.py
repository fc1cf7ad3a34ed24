"""Storage interfaces consumed by the AI gateway and the HTTP layer.

The gateway only ever reads: it calls ``get()`` on the credential and
model-preference stores once per call and never writes to them.
"""

from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """String key-value persistence."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class CredentialStore(Protocol):
    """Holds the user's opaque AI API key."""

    def get(self) -> str: ...

    def set(self, value: str) -> None: ...

    def remove(self) -> None: ...


class ModelPreferenceStore(Protocol):
    """Holds the user's preferred Gemini model name."""

    def get(self) -> str: ...

    def set(self, value: str) -> None: ...
