"""Tests for the MCP tools, called directly and through an in-memory MCP session."""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

import backend.mcp_server as mcp_server
from kids_english import MemoryStore, QuestionBank


@pytest.fixture(autouse=True)
def fresh_bank():
    """Give each test an empty in-memory bank."""
    bank = QuestionBank(MemoryStore())
    mcp_server.set_bank(bank)
    return bank


def _seed(bank):
    bank.commit_import([
        {"type": "sentence-building", "sentence": "Hi", "translation": "嗨", "folderName": "A/B"},
        {"type": "sentence-building", "sentence": "Bye", "translation": "再见", "folderName": "A"},
    ])
    return bank.folders.find_path("A"), bank.folders.find_path("A/B")


def test_list_folders(fresh_bank):
    a, b = _seed(fresh_bank)
    assert [f["id"] for f in mcp_server.list_folders()] == [a.id]
    assert [f["id"] for f in mcp_server.list_folders(a.id)] == [b.id]


def test_folder_path(fresh_bank):
    _, b = _seed(fresh_bank)
    assert mcp_server.folder_path(b.id) == "A / B"


def test_folder_playlist(fresh_bank):
    a, _ = _seed(fresh_bank)
    assert [q["sentence"] for q in mcp_server.folder_playlist(a.id)] == ["Bye", "Hi"]


def test_preview_import_changes_nothing(fresh_bank):
    preview = mcp_server.preview_import([
        {"type": "dialogue", "question": "Q", "answer": "A", "translation": "t", "folderName": "Talk"},
    ])
    assert preview["valid"] == 1
    assert preview["newFolders"] == ["Talk"]
    assert fresh_bank.folders.list_folders() == []


async def test_tools_over_session(fresh_bank):
    _, b = _seed(fresh_bank)
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        tools = await client.list_tools()
        names = {t.name for t in tools.tools}
        assert {"list_folders", "folder_path", "folder_playlist", "preview_import"} <= names

        result = await client.call_tool("folder_path", {"folder_id": b.id})
        assert result.content[0].text == "A / B"

        result = await client.call_tool("preview_import", {"records": [{"type": "x"}]})
        assert json.loads(result.content[0].text)["invalid"] == 1
