"""Question-bank core for the kids' English exercise player.

Parents author questions into a folder tree; the games layer reads them back
as single questions or as playlists built from a folder subtree.

    from kids_english import JsonFileStore, QuestionBank

    bank = QuestionBank(JsonFileStore(Path("data")))
    folder = bank.folders.resolve_or_create("Basics/Family")
    bank.questions.add({"type": "sentence-building", "sentence": "I love my family",
                        "translation": "我爱我的家人", "folder_id": folder.id})
"""

from .bank import QuestionBank  # noqa: F401
from .errors import (  # noqa: F401
    BankError,
    DocumentError,
    InvalidMove,
    InvalidPath,
    NotFound,
    ParseFailure,
)
from .models import Folder, Question, QuestionType  # noqa: F401
from .store import BaseStore, JsonFileStore, MemoryStore  # noqa: F401
