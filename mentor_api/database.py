"""Shared MongoDB connection for the learner storage backend."""

from __future__ import annotations

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from mentor_api.config import Settings

_LOGGER = logging.getLogger(__name__)

STORAGE_COLLECTION = "client_storage"

# One client per process, reused until the URI changes or it is closed.
_client: Optional[MongoClient] = None
_client_uri: Optional[str] = None


def get_mongo_client(settings: Settings) -> MongoClient:
    """Return the process-wide client for ``settings.mongodb_uri``."""
    global _client, _client_uri
    if _client is not None and _client_uri != settings.mongodb_uri:
        close_mongo_connection()
    if _client is None:
        _LOGGER.info("Opening MongoDB connection for learner storage")
        _client = MongoClient(settings.mongodb_uri)
        _client_uri = settings.mongodb_uri
    return _client


def get_database(settings: Settings) -> Database:
    return get_mongo_client(settings)[settings.mongodb_database]


def get_storage_collection(settings: Settings) -> Collection:
    return get_database(settings)[STORAGE_COLLECTION]


def close_mongo_connection() -> None:
    """Close the shared client; the next lookup opens a new one."""
    global _client, _client_uri
    if _client is not None:
        _client.close()
    _client = None
    _client_uri = None
