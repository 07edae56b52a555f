"""Folder tree engine.

Folders form a tree through `parent_id`. Questions point at folders by id,
so every structural change here is plain id bookkeeping across the two
collections.

Paths are `/`-separated folder names walked from the root level down.
Segments are trimmed and empty ones dropped, so " A / /B " is ["A", "B"]. A
level is matched by (name, parent_id); that pair is what makes
resolve_or_create idempotent.
"""

from __future__ import annotations

import logging
from typing import Any, cast

from pydantic import ValidationError

from .errors import InvalidMove, InvalidPath, NotFound, ParseFailure
from .models import AUTO_COLORS, DEFAULT_FOLDER_COLOR, Folder, Record
from .questions import QuestionRepository
from .store import BaseStore, new_id, now_ms

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " / "


def split_path(path: str) -> list[str]:
    """Split on "/", trim, drop empties: "A / B/ /C" → ["A", "B", "C"]."""
    return [part.strip() for part in path.split("/") if part.strip()]


def find_child(folders: list[Folder], name: str, parent_id: str | None) -> Folder | None:
    for folder in folders:
        if folder.name == name and folder.parent_id == parent_id:
            return folder
    return None


def walk_path(folders: list[Folder], segments: list[str]) -> Folder | None:
    """Follow segments down from the root level. None if any level is missing."""
    parent_id: str | None = None
    current: Folder | None = None
    for name in segments:
        current = find_child(folders, name, parent_id)
        if current is None:
            return None
        parent_id = current.id
    return current


def collect_closure(folders: list[Folder], folder_id: str) -> list[str]:
    """The folder id followed by all its descendants, pre-order."""
    children: dict[str | None, list[Folder]] = {}
    for folder in folders:
        children.setdefault(folder.parent_id, []).append(folder)

    result: list[str] = []
    seen: set[str] = set()

    def visit(fid: str) -> None:
        seen.add(fid)
        result.append(fid)
        for child in children.get(fid, []):
            if child.id not in seen:
                visit(child.id)

    visit(folder_id)
    return result


def parse_folders(records: list[Any]) -> list[Folder]:
    try:
        return [Folder.model_validate(r) for r in records]
    except ValidationError as e:
        raise ParseFailure("folders", str(e)) from e


class FolderDeletion(Record):
    """What a folder delete touched."""

    folder_ids: list[str]
    questions_unfiled: int = 0
    questions_deleted: int = 0


class FolderTree:
    def __init__(self, store: BaseStore, questions: QuestionRepository) -> None:
        self._store = store
        self._questions = questions

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_folders(self) -> list[Folder]:
        return parse_folders(self._store.load("folders"))

    def get(self, folder_id: str) -> Folder | None:
        for folder in self.list_folders():
            if folder.id == folder_id:
                return folder
        return None

    def children_of(self, parent_id: str | None = None) -> list[Folder]:
        """Direct children in stored order. None selects the root level."""
        return [f for f in self.list_folders() if f.parent_id == parent_id]

    def roots(self) -> list[Folder]:
        return self.children_of(None)

    def is_leaf(self, folder_id: str) -> bool:
        return not self.children_of(folder_id)

    def closure(self, folder_id: str) -> list[str]:
        """Ids of the folder and every transitive descendant."""
        return collect_closure(self.list_folders(), folder_id)

    def descendants(self, folder_id: str) -> list[Folder]:
        folders = self.list_folders()
        ids = collect_closure(folders, folder_id)[1:]
        by_id = {f.id: f for f in folders}
        return [by_id[fid] for fid in ids]

    def path_of(self, folder_id: str, separator: str = PATH_SEPARATOR) -> str:
        """Root-first names joined by `separator`.

        A dangling parent reference ends the walk, so the path is truncated
        rather than failing.
        """
        by_id = {f.id: f for f in self.list_folders()}
        names: list[str] = []
        current: str | None = folder_id
        while current:
            folder = by_id.get(current)
            if folder is None:
                break
            names.insert(0, folder.name)
            current = folder.parent_id
            if len(names) > len(by_id):
                break
        return separator.join(names)

    def find_path(self, path: str) -> Folder | None:
        """Existing folder at `path`, or None. Never creates anything."""
        segments = split_path(path)
        if not segments:
            return None
        return walk_path(self.list_folders(), segments)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _save(self, folders: list[Folder]) -> None:
        self._store.save("folders", [f.to_record() for f in folders])

    def _append(self, folders: list[Folder], name: str, color: str, parent_id: str | None) -> Folder:
        folder = Folder(
            id=new_id(),
            name=name,
            color=color,
            parent_id=parent_id,
            created_at=now_ms(),
        )
        folders.append(folder)
        self._save(folders)
        return folder

    def create(self, name: str, color: str | None = None, parent_id: str | None = None) -> Folder:
        name = name.strip()
        if not name:
            raise ValueError("Folder name cannot be empty")
        folders = self.list_folders()
        if parent_id is not None and not any(f.id == parent_id for f in folders):
            raise NotFound(f"Parent folder '{parent_id}' not found")
        folder = self._append(folders, name, color or DEFAULT_FOLDER_COLOR, parent_id)
        logger.info("Created folder %r (%s)", name, folder.id)
        return folder

    def resolve_or_create(self, path: str) -> Folder:
        """Return the folder at `path`, creating any missing level on the way.

        New levels get a colour from AUTO_COLORS indexed by the folder count
        at the moment they are created.
        """
        segments = split_path(path)
        if not segments:
            raise InvalidPath(f"Folder path '{path}' contains no folder names")

        parent_id: str | None = None
        current: Folder | None = None
        for name in segments:
            # Re-read each level so folders created earlier in this walk count
            folders = self.list_folders()
            current = find_child(folders, name, parent_id)
            if current is None:
                color = AUTO_COLORS[len(folders) % len(AUTO_COLORS)]
                current = self._append(folders, name, color, parent_id)
                logger.info("Created folder %r under %s", name, parent_id or "root")
            parent_id = current.id
        # segments is non-empty, so the loop set current at least once
        return cast(Folder, current)

    def update(self, folder_id: str, fields: dict[str, Any]) -> Folder | None:
        """Rename, recolour or move a folder. Returns None if it does not exist.

        Only name, color and parent_id (or parentId) are applied.
        """
        folders = self.list_folders()
        for index, folder in enumerate(folders):
            if folder.id == folder_id:
                break
        else:
            return None

        changes: dict[str, Any] = {}
        if fields.get("name") is not None:
            name = str(fields["name"]).strip()
            if not name:
                raise ValueError("Folder name cannot be empty")
            changes["name"] = name
        if "color" in fields and fields["color"]:
            changes["color"] = fields["color"]
        parent_key = next((k for k in ("parent_id", "parentId") if k in fields), None)
        if parent_key is not None:
            new_parent = fields[parent_key] or None
            if new_parent is not None:
                if not any(f.id == new_parent for f in folders):
                    raise NotFound(f"Parent folder '{new_parent}' not found")
                if new_parent in collect_closure(folders, folder_id):
                    raise InvalidMove("A folder cannot be moved into itself or its subfolders")
            changes["parent_id"] = new_parent

        updated = folder.model_copy(update=changes)
        folders[index] = updated
        self._save(folders)
        return updated

    def delete(self, folder_id: str, drop_questions: bool = False) -> FolderDeletion | None:
        """Delete a folder and its whole subtree.

        Questions filed anywhere in the subtree become unfiled, or are deleted
        when `drop_questions` is set. Questions are written before folders so
        no question is ever left pointing at a removed folder.
        """
        folders = self.list_folders()
        if not any(f.id == folder_id for f in folders):
            return None
        ids = collect_closure(folders, folder_id)

        result = FolderDeletion(folder_ids=ids)
        if drop_questions:
            result.questions_deleted = self._questions.delete_in(ids)
        else:
            result.questions_unfiled = self._questions.reassign(ids)

        doomed = set(ids)
        self._save([f for f in folders if f.id not in doomed])
        logger.info(
            "Deleted %d folder(s); %d question(s) unfiled, %d deleted",
            len(ids), result.questions_unfiled, result.questions_deleted,
        )
        return result
