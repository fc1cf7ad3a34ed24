"""Local persistence for the API key, model preference and budgeting dataset."""

from spendwise.storage.interface import CredentialStore, KeyValueStore, ModelPreferenceStore
from spendwise.storage.json_store import ApiKeyStore, DatasetStore, JsonFileStore, ModelStore, open_stores

__all__ = [
    "ApiKeyStore",
    "CredentialStore",
    "DatasetStore",
    "JsonFileStore",
    "KeyValueStore",
    "ModelPreferenceStore",
    "ModelStore",
    "open_stores",
]
