import shutil
from pathlib import Path

import pytest

from backend import storage

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def file_bank():
    """Empty data-tests/ and open a fresh file-backed bank on it for every test.

    Engine tests use the in-memory `bank` fixture instead; this one backs
    storage.bank() for the API, demo and launcher code.
    """
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    yield storage.init_storage(TEST_DATA_DIR)
    # data-tests/ stays behind for inspection
