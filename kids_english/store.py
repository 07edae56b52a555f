"""Persistence of the two collections, `questions` and `folders`.

A store only knows about lists of plain dicts. Each collection is written as a
whole; there are no partial updates. Reading applies the schema migrations for
that collection once, at this boundary, and writes the upgraded list back
straight away so later loads see the new shape.

Missing data loads as an empty list. Data that is present but unreadable
raises ParseFailure.
"""

from __future__ import annotations

import json
import logging
import secrets
import string
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import ParseFailure

logger = logging.getLogger(__name__)

COLLECTIONS = ("questions", "folders")

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def now_ms() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def new_id() -> str:
    """Time component plus random component; safe under rapid successive calls."""
    return _to_base36(now_ms()) + secrets.token_hex(5)


# ── Migrations ───────────────────────────────────────────


def _default_question_type(records: list[Any]) -> int:
    """Questions written before typed exercises existed are sentence-building."""
    changed = 0
    for record in records:
        if isinstance(record, dict) and not record.get("type"):
            record["type"] = "sentence-building"
            changed += 1
    return changed


_MIGRATIONS: dict[str, list[Callable[[list[Any]], int]]] = {
    "questions": [_default_question_type],
    "folders": [],
}


# ── Stores ───────────────────────────────────────────────


class BaseStore(ABC):
    """Load/save contract shared by every backend.

    Subclasses only move text in and out; parsing, migration and
    serialisation live here.
    """

    @abstractmethod
    def _read_text(self, collection: str) -> str | None:
        """Return the raw serialised collection, or None if never written."""

    @abstractmethod
    def _write_text(self, collection: str, text: str) -> None:
        """Replace the serialised collection in one step."""

    def load(self, collection: str) -> list[dict[str, Any]]:
        _check_collection(collection)
        text = self._read_text(collection)
        if text is None:
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseFailure(collection, str(e)) from e
        if not isinstance(data, list):
            raise ParseFailure(collection, f"expected a list, got {type(data).__name__}")

        changed = sum(migrate(data) for migrate in _MIGRATIONS[collection])
        if changed:
            logger.warning("Migrated %d stored %s record(s)", changed, collection)
            self.save(collection, data)
        return data

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        _check_collection(collection)
        self._write_text(collection, json.dumps(records, indent=2, ensure_ascii=False))


class JsonFileStore(BaseStore):
    """One `<collection>.json` file per collection under a data directory.

    Writes go to a temporary sibling that is renamed over the target, so a
    reader never sees a half-written file.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    def path_for(self, collection: str) -> Path:
        return self._base / f"{collection}.json"

    def _read_text(self, collection: str) -> str | None:
        path = self.path_for(collection)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseFailure(collection, f"not UTF-8 text: {e}") from e

    def _write_text(self, collection: str, text: str) -> None:
        path = self.path_for(collection)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)


class MemoryStore(BaseStore):
    """Keeps serialised collections in a dict. Used by tests and scratch banks."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def _read_text(self, collection: str) -> str | None:
        return self._data.get(collection)

    def _write_text(self, collection: str, text: str) -> None:
        self._data[collection] = text

    def raw(self, collection: str) -> str | None:
        """Serialised text as last written (test inspection)."""
        return self._data.get(collection)


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'")
