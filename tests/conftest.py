import pytest

from kids_english import MemoryStore, QuestionBank


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def bank(store: MemoryStore) -> QuestionBank:
    return QuestionBank(store)
