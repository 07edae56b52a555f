"""FastMCP server exposing question-bank reads and import previews as MCP tools.

Tools:
  - list_folders(parent_id)     : direct children of a folder (root when empty)
  - folder_path(folder_id)      : "A / B / C" path of a folder
  - folder_playlist(folder_id)  : every question under a folder, in play order
  - preview_import(records)     : dry-run classification of import records

The bank is replaced via set_bank() for tests, or opened on DATA_DIR when run
as __main__.

Usage:
    uv run python -m backend.mcp_server
"""

from typing import Any

from mcp.server.fastmcp import FastMCP

from kids_english import QuestionBank

mcp = FastMCP("kids-english-bank")

_bank: QuestionBank | None = None


def set_bank(bank: QuestionBank) -> None:
    """Replace the active bank (used in tests)."""
    global _bank
    _bank = bank


def get_bank() -> QuestionBank:
    assert _bank is not None, "Call set_bank() before using the MCP tools"
    return _bank


@mcp.tool()
def list_folders(parent_id: str = "") -> list[dict]:
    """List folders directly under parent_id, or the root folders when it is empty."""
    return [f.to_record() for f in get_bank().folders.children_of(parent_id or None)]


@mcp.tool()
def folder_path(folder_id: str) -> str:
    """Return the full "A / B / C" path of a folder."""
    return get_bank().folders.path_of(folder_id)


@mcp.tool()
def folder_playlist(folder_id: str) -> list[dict]:
    """Return every question under a folder and its subfolders, in play order."""
    return [q.to_record() for q in get_bank().playlist.all_questions_under(folder_id)]


@mcp.tool()
def preview_import(records: list[dict[str, Any]]) -> dict:
    """Check import records and report which folders would be created. Changes nothing."""
    return get_bank().analyze_import(records).to_record()


if __name__ == "__main__":
    import os
    from pathlib import Path

    from dotenv import load_dotenv

    from kids_english import JsonFileStore

    load_dotenv(Path(__file__).parent.parent / ".env")
    data_path = Path(os.getenv("DATA_DIR", Path(__file__).parent.parent / "data"))
    set_bank(QuestionBank(JsonFileStore(data_path)))
    mcp.run()
