"""Create demo folders and questions for development/testing."""

import logging

from backend import storage
from kids_english.samples import EXAMPLE_KINDS, example_document

logger = logging.getLogger(__name__)

# A deeper tree than the example documents build, to exercise nested playlists
NESTED_DEMO = [
    {
        "type": "sentence-building",
        "sentence": "The cat is on the mat",
        "translation": "猫在垫子上",
        "folderName": "Stories/Level 1/Animals",
    },
    {
        "type": "fill-in-blank",
        "sentence": "The ___ can ___ very fast",
        "translation": "兔子能跑得很快",
        "blanks": ["rabbit", "run"],
        "folderName": "Stories/Level 1/Animals",
    },
    {
        "type": "dialogue",
        "question": "Where is the dog",
        "answer": "It is under the table",
        "translation": "狗在哪里？它在桌子下面。",
        "folderName": "Stories/Level 2",
    },
    {
        "type": "sentence-building",
        "sentence": "Good morning",
        "translation": "早上好",
    },
]


def create_demo_data() -> None:
    """Wipe existing questions/folders and import every example document."""
    bank = storage.bank()
    bank.store.save("questions", [])
    bank.store.save("folders", [])

    for kind in EXAMPLE_KINDS:
        if kind == "mixed":
            continue
        result = bank.commit_import(example_document(kind))
        logger.info("Demo %s: %s", kind, result.summary())
    bank.commit_import(NESTED_DEMO)
