"""Storage initialization and the shared QuestionBank instance."""

from pathlib import Path

from kids_english import JsonFileStore, QuestionBank

_data_dir: Path | None = None
_bank: QuestionBank | None = None


def init_storage(data_dir: Path) -> QuestionBank:
    global _data_dir, _bank
    _data_dir = Path(data_dir)
    _bank = QuestionBank(JsonFileStore(_data_dir))
    return _bank


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def bank() -> QuestionBank:
    assert _bank is not None, "Call init_storage() before using storage"
    return _bank
