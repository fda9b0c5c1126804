"""Document stores for generated recipes.

A store maps a canonical ingredient key to one recipe document:

- get(key): the stored recipe dict, or None
- set(key, value): blind create-or-overwrite (no compare-and-swap), returns
  the recipe as persisted with server timestamps resolved
- server_timestamp(): placeholder the store replaces with its own clock on set

FirestoreRecipeStore is the production backend; InMemoryRecipeStore serves
local runs and tests. Both are synchronous; services call them through
asyncio.to_thread.
"""

import copy
import json
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

import firebase_admin
from firebase_admin import credentials, firestore

from src.utils.config import Config
from src.utils.logger import logger


class RecipeStore(Protocol):
    def get(self, key: str) -> Optional[dict[str, Any]]: ...

    def set(self, key: str, value: dict[str, Any]) -> dict[str, Any]: ...

    def server_timestamp(self) -> Any: ...


class FirestoreRecipeStore:
    """Recipes stored as documents of one Firestore collection, document id = key."""

    def __init__(self, client: Any, collection: str = "recipes") -> None:
        self.client = client
        self.collection = collection

    def _document(self, key: str):
        return self.client.collection(self.collection).document(key)

    def get(self, key: str) -> Optional[dict[str, Any]]:
        snapshot = self._document(key).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def set(self, key: str, value: dict[str, Any]) -> dict[str, Any]:
        write_result = self._document(key).set(value)
        # SERVER_TIMESTAMP fields resolve to the commit time of this write
        persisted = dict(value)
        for field, field_value in value.items():
            if field_value is firestore.SERVER_TIMESTAMP:
                persisted[field] = write_result.update_time
        return persisted

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


class InMemoryRecipeStore:
    """Process-local dict store. Contents are lost on restart."""

    SERVER_TIMESTAMP = _ServerTimestamp()

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> Optional[dict[str, Any]]:
        document = self._documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    def set(self, key: str, value: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {
            field: (now if field_value is self.SERVER_TIMESTAMP else copy.deepcopy(field_value))
            for field, field_value in value.items()
        }
        self._documents[key] = document
        return copy.deepcopy(document)

    def server_timestamp(self) -> Any:
        return self.SERVER_TIMESTAMP

    def __len__(self) -> int:
        return len(self._documents)


def create_firestore_client(cfg: Config) -> Any:
    """Initialize the Firebase Admin app once and return its Firestore client.

    Uses FIREBASE_SERVICE_ACCOUNT_JSON when set, application default
    credentials otherwise.
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        options = {"projectId": cfg.GOOGLE_CLOUD_PROJECT} if cfg.GOOGLE_CLOUD_PROJECT else None
        if cfg.FIREBASE_SERVICE_ACCOUNT_JSON:
            cred = credentials.Certificate(json.loads(cfg.FIREBASE_SERVICE_ACCOUNT_JSON))
            app = firebase_admin.initialize_app(cred, options)
        else:
            app = firebase_admin.initialize_app(options=options)
        logger.info(f"Firebase Admin initialized (project={app.project_id})")
    return firestore.client(app)


def create_recipe_store(cfg: Config) -> RecipeStore:
    """Build the store selected by STORE_BACKEND."""
    if cfg.STORE_BACKEND == "memory":
        logger.info("Using in-memory recipe store (not persistent)")
        return InMemoryRecipeStore()
    logger.info(f"Using Firestore recipe store (collection={cfg.RECIPES_COLLECTION})")
    return FirestoreRecipeStore(create_firestore_client(cfg), cfg.RECIPES_COLLECTION)
