"""Client-side persistence of learner progress, history and preferences.

Everything lives in one JSON blob stored under a single namespaced key. Each
accessor re-reads the blob, changes it and writes it back whole, so the store
assumes a single writer; two concurrent writers lose updates (last write wins).

Storage faults never reach callers: a failed or corrupt read falls back to a
fresh default blob and a failed write is logged and dropped.
"""

from __future__ import annotations

import copy
import json
import logging
import math
import os
import secrets
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from mentor_api.config import DEFAULT_STORAGE_KEY, Settings
from mentor_api.database import get_storage_collection
from mentor_api.errors import StorageFailure

_LOGGER = logging.getLogger(__name__)

CHAT_HISTORY_LIMIT = 100
ACTIVITY_LIMIT = 50

_DEFAULT_DATA: Dict[str, Any] = {
    "progress": {},
    "completedConcepts": [],
    "assessmentResults": [],
    "chatHistory": [],
    "activities": [],
    "userPreferences": {
        "darkMode": True,
        "notifications": True,
    },
}


class MemoryBackend:
    """Process-local key-value backend."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend:
    """Key-value backend persisted as one JSON object on disk."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                items = json.load(handle)
        except (OSError, ValueError) as exc:
            raise StorageFailure(f"Could not read {self.path}", details=str(exc)) from exc
        if not isinstance(items, dict):
            raise StorageFailure(f"Unexpected content in {self.path}")
        return items

    def _dump(self, items: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageFailure(f"Could not write {self.path}", details=str(exc)) from exc

    def _load_for_update(self) -> Tuple[Dict[str, str], bool]:
        """Load the items to modify; an unreadable file is replaced by an empty one."""
        try:
            return self._load(), False
        except StorageFailure as exc:
            _LOGGER.warning("Discarding unreadable storage file %s: %s", self.path, exc.details or exc)
            return {}, True

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items, _ = self._load_for_update()
        items[key] = value
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items, discarded = self._load_for_update()
        if items.pop(key, None) is not None or discarded:
            self._dump(items)


class MongoBackend:
    """Key-value backend storing one document per key in a MongoDB collection."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def get_item(self, key: str) -> Optional[str]:
        try:
            document = self.collection.find_one({"key": key})
        except PyMongoError as exc:
            raise StorageFailure(f"Could not read key {key}", details=str(exc)) from exc
        return document.get("value") if document else None

    def set_item(self, key: str, value: str) -> None:
        try:
            self.collection.update_one(
                {"key": key},
                {"$set": {"value": value, "updated_at": datetime.now(timezone.utc)}},
                upsert=True,
            )
        except PyMongoError as exc:
            raise StorageFailure(f"Could not write key {key}", details=str(exc)) from exc

    def remove_item(self, key: str) -> None:
        try:
            self.collection.delete_one({"key": key})
        except PyMongoError as exc:
            raise StorageFailure(f"Could not remove key {key}", details=str(exc)) from exc


def build_backend(settings: Settings):
    """Pick the storage backend the configuration asks for."""
    if settings.enable_mongodb:
        return MongoBackend(get_storage_collection(settings))
    if settings.storage_path:
        return JsonFileBackend(settings.storage_path)
    return MemoryBackend()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_percentage(value: float) -> int:
    return max(0, min(100, _round_half_up(value)))


class ProgressStore:
    """Typed accessors over the namespaced learner-state blob."""

    def __init__(self, backend, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.backend = backend
        self.storage_key = storage_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProgressStore":
        return cls(build_backend(settings), settings.storage_key)

    def _default_data(self) -> Dict[str, Any]:
        return copy.deepcopy(_DEFAULT_DATA)

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self.backend.get_item(self.storage_key)
            if raw is None:
                return self._default_data()
            data = json.loads(raw)
        except (StorageFailure, ValueError, TypeError) as exc:
            _LOGGER.error("Error reading learner storage: %s", exc)
            return self._default_data()

        if not isinstance(data, dict):
            _LOGGER.error("Learner storage held %s instead of an object; starting fresh", type(data).__name__)
            return self._default_data()

        # Fill missing or mistyped sections so older blobs keep working.
        for key, default_value in self._default_data().items():
            if not isinstance(data.get(key), type(default_value)):
                data[key] = default_value
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.backend.set_item(self.storage_key, json.dumps(data))
        except (StorageFailure, TypeError, ValueError) as exc:
            _LOGGER.error("Error saving learner storage: %s", exc)

    # Progress management
    def get_progress(self, role_id: str) -> int:
        return self._read()["progress"].get(role_id) or 0

    def update_progress(self, role_id: str, value: float) -> None:
        data = self._read()
        data["progress"][role_id] = _clamp_percentage(value)
        self._write(data)

    # Concept completion
    def mark_concept_complete(self, concept_id: str) -> None:
        data = self._read()
        if concept_id not in data["completedConcepts"]:
            data["completedConcepts"].append(concept_id)
            self._write(data)

    def is_concept_complete(self, concept_id: str) -> bool:
        return concept_id in self._read()["completedConcepts"]

    # Assessment results
    def save_assessment_result(self, result: Dict[str, Any]) -> None:
        data = self._read()
        data["assessmentResults"].append({**result, "timestamp": _now_iso()})
        self._write(data)

    def get_assessment_results(self, role_id: Optional[str] = None) -> List[Dict[str, Any]]:
        results = self._read()["assessmentResults"]
        if role_id:
            return [result for result in results if result.get("jobRole") == role_id]
        return results

    # Chat history
    def save_chat_message(self, message: Dict[str, Any]) -> None:
        data = self._read()
        history = data["chatHistory"]
        history.append({**message, "timestamp": _now_iso()})
        data["chatHistory"] = history[-CHAT_HISTORY_LIMIT:]
        self._write(data)

    def get_chat_history(self) -> List[Dict[str, Any]]:
        return self._read()["chatHistory"]

    def clear_chat_history(self) -> None:
        data = self._read()
        data["chatHistory"] = []
        self._write(data)

    # User preferences
    def update_preferences(self, **preferences: Any) -> None:
        data = self._read()
        data["userPreferences"] = {**data["userPreferences"], **preferences}
        self._write(data)

    def get_preferences(self) -> Dict[str, Any]:
        return self._read()["userPreferences"]

    # Activity tracking
    def add_activity(self, activity: Dict[str, Any]) -> Dict[str, Any]:
        data = self._read()
        entry = {
            **activity,
            "id": f"act_{secrets.token_urlsafe(8)}",
            "timestamp": _now_iso(),
        }
        data["activities"].insert(0, entry)
        data["activities"] = data["activities"][:ACTIVITY_LIMIT]
        self._write(data)
        return entry

    def get_recent_activities(self, limit: int = 10) -> List[Dict[str, Any]]:
        return self._read()["activities"][:limit]

    def get_overall_stats(self) -> Dict[str, int]:
        data = self._read()
        values = [value for value in data["progress"].values() if isinstance(value, (int, float))]
        average = sum(values) / len(values) if values else 0

        return {
            "totalConceptsCompleted": len(data["completedConcepts"]),
            "averageProgress": _round_half_up(average),
            "totalAssessments": len(data["assessmentResults"]),
            "totalChatMessages": len(data["chatHistory"]),
            "activeRoles": len(data["progress"]),
        }

    def clear_all_data(self) -> None:
        try:
            self.backend.remove_item(self.storage_key)
        except StorageFailure as exc:
            _LOGGER.error("Error clearing learner storage: %s", exc)
