"""QuestionBank: the engines wired to one store behind a single writer lock.

Reads can go straight to `bank.questions`, `bank.folders` and
`bank.playlist`. Writes that touch more than one record, or both
collections, go through the methods here so nothing else can interleave
between reading state and writing it back.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Any

from .folders import FolderDeletion, FolderTree
from .importer import ImportAnalyzer, ImportPreview, ImportResult
from .models import Folder, Question
from .playlist import PlaylistAggregator
from .questions import QuestionRepository
from .store import BaseStore


class QuestionBank:
    def __init__(self, store: BaseStore) -> None:
        self.store = store
        self.questions = QuestionRepository(store)
        self.folders = FolderTree(store, self.questions)
        self.playlist = PlaylistAggregator(self.folders, self.questions)
        self.importer = ImportAnalyzer(self.folders, self.questions)
        self._lock = threading.RLock()

    # ── Questions ────────────────────────────────────────

    def add_question(self, data: dict[str, Any]) -> Question:
        with self._lock:
            return self.questions.add(data)

    def update_question(self, question_id: str, fields: dict[str, Any]) -> Question | None:
        with self._lock:
            return self.questions.update(question_id, fields)

    def delete_question(self, question_id: str) -> bool:
        with self._lock:
            return self.questions.delete(question_id)

    # ── Folders ──────────────────────────────────────────

    def create_folder(self, name: str, color: str | None = None, parent_id: str | None = None) -> Folder:
        with self._lock:
            return self.folders.create(name, color=color, parent_id=parent_id)

    def resolve_folder(self, path: str) -> Folder:
        with self._lock:
            return self.folders.resolve_or_create(path)

    def update_folder(self, folder_id: str, fields: dict[str, Any]) -> Folder | None:
        with self._lock:
            return self.folders.update(folder_id, fields)

    def delete_folder(self, folder_id: str, drop_questions: bool = False) -> FolderDeletion | None:
        with self._lock:
            return self.folders.delete(folder_id, drop_questions=drop_questions)

    def describe_folder(self, folder_id: str) -> dict[str, Any] | None:
        """Folder record plus its path, leaf flag and subtree question count."""
        with self._lock:
            folder = self.folders.get(folder_id)
            if folder is None:
                return None
            return {
                **folder.to_record(),
                "path": self.folders.path_of(folder_id),
                "isLeaf": self.folders.is_leaf(folder_id),
                "totalCount": self.playlist.total_count(folder_id),
            }

    # ── Import ───────────────────────────────────────────

    def analyze_import(self, records: Sequence[Any]) -> ImportPreview:
        with self._lock:
            return self.importer.analyze(records)

    def commit_import(self, records: Sequence[Any]) -> ImportResult:
        with self._lock:
            return self.importer.commit(records)
