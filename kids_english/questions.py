"""Question repository: CRUD over the `questions` collection.

Only record shape is enforced here (a known `type`, fields of the right
kind). Cross-field rules such as matching lists having equal length are
checked by whoever builds the data: the editor UI or the import analyzer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .errors import ParseFailure
from .models import COMMON_FIELDS, VARIANTS, Question, parse_question
from .store import BaseStore, new_id, now_ms

logger = logging.getLogger(__name__)

_IMMUTABLE = {"id", "created_at"}

# camelCase API name → attribute name, across every variant
_FIELD_NAMES: dict[str, str] = {
    to_camel(name): name for model in VARIANTS.values() for name in model.model_fields
}


def _normalise_keys(fields: dict[str, Any]) -> dict[str, Any]:
    return {_FIELD_NAMES.get(key, key): value for key, value in fields.items()}


def parse_questions(records: list[Any]) -> list[Question]:
    """Validate stored records. Any bad record makes the collection unreadable."""
    try:
        return [parse_question(r) for r in records]
    except ValidationError as e:
        raise ParseFailure("questions", str(e)) from e


class QuestionRepository:
    def __init__(self, store: BaseStore) -> None:
        self._store = store

    def list_questions(self) -> list[Question]:
        return parse_questions(self._store.load("questions"))

    def _save(self, questions: list[Question]) -> None:
        self._store.save("questions", [q.to_record() for q in questions])

    def get(self, question_id: str) -> Question | None:
        for question in self.list_questions():
            if question.id == question_id:
                return question
        return None

    def by_folder(self, folder_id: str | None = None) -> list[Question]:
        """Questions filed directly in a folder. None selects the unfiled bucket."""
        if folder_id is None:
            return [q for q in self.list_questions() if not q.folder_id]
        return [q for q in self.list_questions() if q.folder_id == folder_id]

    def build(self, data: dict[str, Any]) -> Question:
        """Validate new question data and stamp it with an id and creation time."""
        fields = {k: v for k, v in _normalise_keys(data).items() if k not in _IMMUTABLE}
        fields["id"] = new_id()
        fields["created_at"] = now_ms()
        return parse_question(fields)

    def add(self, data: dict[str, Any]) -> Question:
        question = self.build(data)
        questions = self.list_questions()
        questions.append(question)
        self._save(questions)
        logger.debug("Added %s question %s", question.type, question.id)
        return question

    def add_many(self, items: Iterable[dict[str, Any]]) -> list[Question]:
        """Add several questions with a single store write.

        Every item is validated before anything is written, so a bad item
        leaves the collection untouched.
        """
        new = [self.build(data) for data in items]
        if new:
            questions = self.list_questions()
            questions.extend(new)
            self._save(questions)
        return new

    def merged(self, question_id: str, fields: dict[str, Any]) -> Question | None:
        """The question `update` would store, without storing it.

        Changing `type` drops every type-specific field of the old variant;
        the new variant's fields come only from `fields`.
        """
        question = self.get(question_id)
        if question is None:
            return None
        return self._merge(question, fields)

    def _merge(self, question: Question, fields: dict[str, Any]) -> Question:
        updates = {
            k: v for k, v in _normalise_keys(fields).items() if k not in _IMMUTABLE
        }
        current = question.model_dump()
        if updates.get("type", question.type) != question.type:
            merged = {k: v for k, v in current.items() if k in COMMON_FIELDS}
        else:
            merged = current
        merged.update(updates)
        return parse_question(merged)

    def update(self, question_id: str, fields: dict[str, Any]) -> Question | None:
        """Merge fields into a question. Returns None if the id is unknown."""
        questions = self.list_questions()
        for index, question in enumerate(questions):
            if question.id == question_id:
                break
        else:
            return None

        updated = self._merge(question, fields)
        questions[index] = updated
        self._save(questions)
        return updated

    def delete(self, question_id: str) -> bool:
        questions = self.list_questions()
        kept = [q for q in questions if q.id != question_id]
        if len(kept) == len(questions):
            return False
        self._save(kept)
        return True

    def reassign(self, folder_ids: Iterable[str], target: str | None = None) -> int:
        """Move every question filed in `folder_ids` to `target` (None → unfiled)."""
        ids = set(folder_ids)
        questions = self.list_questions()
        moved = 0
        for index, question in enumerate(questions):
            if question.folder_id and question.folder_id in ids:
                questions[index] = question.model_copy(update={"folder_id": target})
                moved += 1
        if moved:
            self._save(questions)
        return moved

    def delete_in(self, folder_ids: Iterable[str]) -> int:
        """Delete every question filed in `folder_ids`. Returns how many went."""
        ids = set(folder_ids)
        questions = self.list_questions()
        kept = [q for q in questions if not (q.folder_id and q.folder_id in ids)]
        removed = len(questions) - len(kept)
        if removed:
            self._save(kept)
        return removed
