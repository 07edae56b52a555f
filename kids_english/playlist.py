"""Playlists: every question under a folder subtree, in play order.

Order is direct questions of a folder first, then each child folder in
stored order, depth-first. Recursion depth equals tree depth.
"""

from __future__ import annotations

from .folders import FolderTree
from .models import Folder, Question
from .questions import QuestionRepository


def _collect(
    folder_id: str,
    questions: list[Question],
    children: dict[str | None, list[Folder]],
) -> list[Question]:
    result = [q for q in questions if q.folder_id == folder_id]
    for child in children.get(folder_id, []):
        result.extend(_collect(child.id, questions, children))
    return result


class PlaylistAggregator:
    def __init__(self, folders: FolderTree, questions: QuestionRepository) -> None:
        self._folders = folders
        self._questions = questions

    def _snapshot(self) -> tuple[list[Question], dict[str | None, list[Folder]]]:
        children: dict[str | None, list[Folder]] = {}
        for folder in self._folders.list_folders():
            children.setdefault(folder.parent_id, []).append(folder)
        return self._questions.list_questions(), children

    def all_questions_under(self, folder_id: str) -> list[Question]:
        questions, children = self._snapshot()
        return _collect(folder_id, questions, children)

    def total_count(self, folder_id: str) -> int:
        """Questions in the folder plus all of its descendants."""
        return len(self.all_questions_under(folder_id))


class PlaylistSession:
    """Stepping state for the games layer.

    start_game() plays one question; start_playlist() queues a sequence.
    advance() moves to the next question and returns it, or None at the end.
    """

    def __init__(self) -> None:
        self._queue: list[Question] = []
        self._index = 0

    @property
    def queue(self) -> list[Question]:
        return list(self._queue)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Question | None:
        if not self._queue:
            return None
        return self._queue[self._index]

    @property
    def has_next(self) -> bool:
        return self._index < len(self._queue) - 1

    def start_game(self, question: Question) -> Question:
        self._queue = [question]
        self._index = 0
        return question

    def start_playlist(self, questions: list[Question]) -> Question | None:
        """Queue `questions`. An empty list leaves the session unchanged."""
        if not questions:
            return None
        self._queue = list(questions)
        self._index = 0
        return self._queue[0]

    def advance(self) -> Question | None:
        if not self.has_next:
            return None
        self._index += 1
        return self._queue[self._index]

    def reset(self) -> None:
        self._queue = []
        self._index = 0
