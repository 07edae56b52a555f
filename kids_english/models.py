"""Question and folder records.

Pydantic validates every record that crosses the store boundary. Python code
uses snake_case attributes; the persisted JSON and the HTTP API use the
camelCase names the browser UI was built against (`folderId`,
`wordTranslations`, `showQuestion`, `createdAt`). Optional fields that are
unset are left out of the dump entirely.

Questions are a discriminated union on `type`. Each variant only carries the
fields that mean something for it:

    sentence-building  sentence is the full sentence to rebuild
    matching           sentence is the set title; words / wordTranslations
    spelling           sentence is the word; word, phonetic, meaning, distractors
    fill-in-blank      sentence holds ___ markers; blanks fills them in order
    dialogue           question / answer; showQuestion picks the revealed side
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

QuestionType = Literal[
    "sentence-building",
    "matching",
    "spelling",
    "fill-in-blank",
    "dialogue",
]

QUESTION_TYPES: tuple[str, ...] = get_args(QuestionType)

# Colours handed out by resolve_or_create, indexed by total folder count
AUTO_COLORS: tuple[str, ...] = (
    "bg-blue-200 text-blue-800",
    "bg-green-200 text-green-800",
    "bg-purple-200 text-purple-800",
    "bg-pink-200 text-pink-800",
    "bg-yellow-200 text-yellow-800",
    "bg-orange-200 text-orange-800",
    "bg-red-200 text-red-800",
    "bg-indigo-200 text-indigo-800",
)

DEFAULT_FOLDER_COLOR = "bg-blue-500"

BLANK_MARKER = re.compile(r"_{3,}")


def count_blanks(sentence: str) -> int:
    """Number of blank markers (runs of three or more underscores)."""
    return len(BLANK_MARKER.findall(sentence))


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Dump in the persisted/API shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Folder(Record):
    """A node in the classification tree."""

    id: str
    name: str
    color: str = DEFAULT_FOLDER_COLOR
    parent_id: str | None = None  # None → root level
    created_at: int


class QuestionBase(Record):
    id: str
    type: QuestionType
    sentence: str
    translation: str
    folder_id: str | None = None  # None → unfiled
    created_at: int


class SentenceBuildingQuestion(QuestionBase):
    type: Literal["sentence-building"] = "sentence-building"


class MatchingQuestion(QuestionBase):
    type: Literal["matching"] = "matching"
    words: list[str] = Field(default_factory=list)
    word_translations: list[str] = Field(default_factory=list)


class SpellingQuestion(QuestionBase):
    type: Literal["spelling"] = "spelling"
    word: str = ""
    phonetic: str | None = None
    meaning: str = ""
    distractors: list[str] = Field(default_factory=list)


class FillInBlankQuestion(QuestionBase):
    type: Literal["fill-in-blank"] = "fill-in-blank"
    blanks: list[str] = Field(default_factory=list)


class DialogueQuestion(QuestionBase):
    type: Literal["dialogue"] = "dialogue"
    question: str = ""
    answer: str = ""
    show_question: bool = True


Question = Annotated[
    Union[
        SentenceBuildingQuestion,
        MatchingQuestion,
        SpellingQuestion,
        FillInBlankQuestion,
        DialogueQuestion,
    ],
    Field(discriminator="type"),
]

QUESTION_ADAPTER: TypeAdapter[Question] = TypeAdapter(Question)

VARIANTS: dict[str, type[QuestionBase]] = {
    "sentence-building": SentenceBuildingQuestion,
    "matching": MatchingQuestion,
    "spelling": SpellingQuestion,
    "fill-in-blank": FillInBlankQuestion,
    "dialogue": DialogueQuestion,
}

COMMON_FIELDS: frozenset[str] = frozenset(QuestionBase.model_fields)

# Field names that only mean something for one variant
TYPE_FIELDS: dict[str, frozenset[str]] = {
    name: frozenset(model.model_fields) - COMMON_FIELDS
    for name, model in VARIANTS.items()
}


def parse_question(data: dict[str, Any]) -> Question:
    """Validate a question dict (snake_case or camelCase keys) into its variant."""
    return QUESTION_ADAPTER.validate_python(data)
