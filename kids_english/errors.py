"""Exceptions raised by the question-bank core."""


class BankError(Exception):
    """Base class for every error the core raises on purpose."""


class ParseFailure(BankError):
    """A persisted collection exists but cannot be deserialised."""

    def __init__(self, collection: str, detail: str) -> None:
        super().__init__(f"Cannot read stored {collection}: {detail}")
        self.collection = collection
        self.detail = detail


class InvalidPath(BankError, ValueError):
    """A folder path has no usable segments once split and trimmed."""


class InvalidMove(BankError, ValueError):
    """Moving a folder would put it under itself or one of its descendants."""


class NotFound(BankError, KeyError):
    """A referenced folder or question does not exist."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""


class DocumentError(BankError, ValueError):
    """An import document is not a JSON list of records."""
