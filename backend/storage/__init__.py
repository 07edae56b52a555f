"""Process-wide question bank backed by JSON files.

Data layout:
  data/
    questions.json   Every question (flat list, camelCase records)
    folders.json     Every folder (flat list, tree via parentId)

init_storage() must run before bank() is used; the app factory and the test
conftest both call it. Everything else talks to the returned QuestionBank.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    bank,
    data_dir,
    init_storage,
)
