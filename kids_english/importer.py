"""Bulk import of question records.

Import is two-phase. analyze() looks at the records and the current folder
tree and reports what would happen without touching anything. commit() takes
the same original records, validates each one again with the same function,
and applies the valid ones. Both phases go through check_record(), so a
record the preview called valid is exactly a record the commit adds.

Rules, checked in order; the first failure rejects the record:

  1. type and translation present
  2. sentence present (except dialogue)
  3. type is a known question type
  4. matching: words / wordTranslations are lists of equal, non-zero length
  5. spelling: word and meaning present, distractors a list of exactly 3
  6. fill-in-blank: blanks a non-empty list, one per ___ marker in sentence
  7. dialogue: question and answer present
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import Field

from .errors import DocumentError
from .folders import FolderTree, split_path, walk_path
from .models import QUESTION_TYPES, Folder, Question, Record, count_blanks
from .questions import QuestionRepository

logger = logging.getLogger(__name__)


class ValidationFailure(Record):
    """One rejected record. Collected, never raised."""

    index: int
    rule: int
    reason: str


class ImportPreview(Record):
    total: int
    valid: int
    invalid: int
    valid_indices: list[int] = Field(default_factory=list)
    failures: list[ValidationFailure] = Field(default_factory=list)
    new_folders: list[str] = Field(default_factory=list)
    existing_folders: list[str] = Field(default_factory=list)

    def summary(self) -> str:
        lines = [f"{self.total} record(s): {self.valid} valid, {self.invalid} invalid"]
        if self.new_folders:
            lines.append("New folders: " + ", ".join(self.new_folders))
        if self.existing_folders:
            lines.append("Existing folders: " + ", ".join(self.existing_folders))
        for failure in self.failures:
            lines.append(f"Record {failure.index + 1}: {failure.reason}")
        return "\n".join(lines)


class ImportResult(Record):
    added: list[Question] = Field(default_factory=list)
    added_indices: list[int] = Field(default_factory=list)
    skipped: int = 0
    folders_created: int = 0

    def summary(self) -> str:
        message = f"Imported {len(self.added)} question(s)"
        if self.folders_created > 0:
            message += f", created {self.folders_created} new folder(s)"
        return message


# ── Validation ───────────────────────────────────────────


def _present(value: Any) -> bool:
    """A value counts as given unless it is null, false, empty text or zero."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0
    return True


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _texts(values: list[Any]) -> list[str]:
    return [_text(v) for v in values]


def _fail(index: int, rule: int, reason: str) -> ValidationFailure:
    return ValidationFailure(index=index, rule=rule, reason=reason)


def check_record(record: Any, index: int = 0) -> dict[str, Any] | ValidationFailure:
    """Validate one import record.

    Returns either question data ready for QuestionRepository.build() (without
    a folder) or the first rule it breaks.
    """
    if not isinstance(record, dict):
        return _fail(index, 1, "record is not an object")

    qtype = record.get("type")
    if not _present(qtype) or not _present(record.get("translation")):
        return _fail(index, 1, "type and translation are required")
    if qtype != "dialogue" and not _present(record.get("sentence")):
        return _fail(index, 2, "sentence is required")
    if qtype not in QUESTION_TYPES:
        return _fail(index, 3, f"unknown question type {qtype!r}")

    if qtype == "matching":
        words = record.get("words")
        translations = record.get("wordTranslations")
        if not isinstance(words, list) or not isinstance(translations, list):
            return _fail(index, 4, "words and wordTranslations must be lists")
        if len(words) != len(translations):
            return _fail(
                index, 4,
                f"{len(words)} words but {len(translations)} translations",
            )
        if not words:
            return _fail(index, 4, "a matching set needs at least one word")

    if qtype == "spelling":
        distractors = record.get("distractors")
        if (
            not _present(record.get("word"))
            or not _present(record.get("meaning"))
            or not isinstance(distractors, list)
        ):
            return _fail(index, 5, "word, meaning and distractors are required")
        if len(distractors) != 3:
            return _fail(index, 5, f"expected 3 distractors, got {len(distractors)}")

    if qtype == "fill-in-blank":
        blanks = record.get("blanks")
        if not isinstance(blanks, list) or not blanks:
            return _fail(index, 6, "blanks must be a non-empty list")
        markers = count_blanks(_text(record["sentence"]))
        if markers != len(blanks):
            return _fail(
                index, 6,
                f"sentence has {markers} blank(s) but {len(blanks)} answer(s) given",
            )

    if qtype == "dialogue":
        if not _present(record.get("question")) or not _present(record.get("answer")):
            return _fail(index, 7, "question and answer are required")

    return _draft(record)


def _draft(record: dict[str, Any]) -> dict[str, Any]:
    qtype = record["type"]
    draft: dict[str, Any] = {"type": qtype, "translation": _text(record["translation"])}

    if qtype == "dialogue":
        question = _text(record["question"])
        answer = _text(record["answer"])
        sentence = record.get("sentence")
        draft["sentence"] = _text(sentence) if _present(sentence) else f"{question} / {answer}"
        draft["question"] = question
        draft["answer"] = answer
        show = record.get("showQuestion")
        draft["show_question"] = True if show is None else bool(show)
        return draft

    draft["sentence"] = _text(record["sentence"])
    if qtype == "matching":
        draft["words"] = _texts(record["words"])
        draft["word_translations"] = _texts(record["wordTranslations"])
    elif qtype == "spelling":
        draft["word"] = _text(record["word"])
        draft["meaning"] = _text(record["meaning"])
        draft["distractors"] = _texts(record["distractors"])
        if _present(record.get("phonetic")):
            draft["phonetic"] = _text(record["phonetic"])
    elif qtype == "fill-in-blank":
        draft["blanks"] = _texts(record["blanks"])
    return draft


def folder_segments(record: dict[str, Any]) -> list[str]:
    """Path segments of a record's folderName; [] when there is none to use."""
    name = record.get("folderName")
    if not isinstance(name, str):
        return []
    return split_path(name)


# ── Phases ───────────────────────────────────────────────


def analyze(records: Sequence[Any], folders: list[Folder]) -> ImportPreview:
    """Classify records and folder paths against a folder snapshot. Pure."""
    valid_indices: list[int] = []
    failures: list[ValidationFailure] = []
    new_paths: set[str] = set()
    existing_paths: set[str] = set()

    for index, record in enumerate(records):
        outcome = check_record(record, index)
        if isinstance(outcome, ValidationFailure):
            failures.append(outcome)
            continue
        valid_indices.append(index)

        segments = folder_segments(record)
        for depth in range(1, len(segments) + 1):
            prefix = segments[:depth]
            key = "/".join(prefix)
            if walk_path(folders, prefix) is not None:
                existing_paths.add(key)
            else:
                new_paths.add(key)

    return ImportPreview(
        total=len(records),
        valid=len(valid_indices),
        invalid=len(failures),
        valid_indices=valid_indices,
        failures=failures,
        new_folders=sorted(new_paths),
        existing_folders=sorted(existing_paths),
    )


def commit(
    records: Sequence[Any],
    folders: FolderTree,
    questions: QuestionRepository,
) -> ImportResult:
    """Apply every record that passes check_record().

    Folders are resolved record by record; the questions themselves are added
    in one write at the end. folders_created is the folder count difference,
    which holds because nothing else writes folders during a commit.
    """
    before = len(folders.list_folders())
    drafts: list[dict[str, Any]] = []
    indices: list[int] = []
    skipped = 0

    for index, record in enumerate(records):
        outcome = check_record(record, index)
        if isinstance(outcome, ValidationFailure):
            logger.warning("Skipping import record %d: %s", index, outcome.reason)
            skipped += 1
            continue

        segments = folder_segments(record)
        if segments:
            outcome["folder_id"] = folders.resolve_or_create("/".join(segments)).id
        elif _present(record.get("folderId")):
            outcome["folder_id"] = _text(record["folderId"])
        drafts.append(outcome)
        indices.append(index)

    added = questions.add_many(drafts)
    created = len(folders.list_folders()) - before
    logger.info("Imported %d question(s), %d new folder(s)", len(added), created)
    return ImportResult(
        added=added,
        added_indices=indices,
        skipped=skipped,
        folders_created=created,
    )


class ImportAnalyzer:
    def __init__(self, folders: FolderTree, questions: QuestionRepository) -> None:
        self._folders = folders
        self._questions = questions

    def analyze(self, records: Sequence[Any]) -> ImportPreview:
        return analyze(records, self._folders.list_folders())

    def commit(self, records: Sequence[Any]) -> ImportResult:
        return commit(records, self._folders, self._questions)


def parse_document(text: str | bytes) -> list[Any]:
    """Parse an uploaded import document into its list of records."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentError(f"Import file is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DocumentError("Import document must be a JSON list of records")
    return data
