"""Folder tree endpoints: navigation, path resolution, delete, playlists."""

from fastapi import APIRouter, HTTPException

from backend import storage
from kids_english import InvalidMove, InvalidPath, NotFound

from .models import CreateFolder, ResolvePath, UpdateFolder

router = APIRouter()


@router.get("/folders")
async def list_folders(parent_id: str | None = None):
    """List direct children of a folder (root level when parent_id is omitted)."""
    return [f.to_record() for f in storage.bank().folders.children_of(parent_id)]


@router.post("/folders", status_code=201)
async def create_folder(body: CreateFolder):
    """Create a folder, optionally under a parent."""
    try:
        folder = storage.bank().create_folder(body.name, color=body.color, parent_id=body.parent_id)
    except NotFound as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return folder.to_record()


@router.post("/folders/resolve")
async def resolve_folder(body: ResolvePath):
    """Find the folder at an "A/B/C" path, creating missing levels."""
    try:
        folder = storage.bank().resolve_folder(body.path)
    except InvalidPath as e:
        raise HTTPException(400, str(e))
    return {**folder.to_record(), "path": storage.bank().folders.path_of(folder.id)}


@router.get("/folders/{folder_id}")
async def get_folder(folder_id: str):
    """Get a folder with its full path, leaf flag and subtree question count."""
    described = storage.bank().describe_folder(folder_id)
    if described is None:
        raise HTTPException(404, "Folder not found")
    return described


@router.patch("/folders/{folder_id}")
async def update_folder(folder_id: str, body: UpdateFolder):
    """Rename, recolour or move a folder. A null parentId moves it to the root."""
    fields = body.model_dump(exclude_unset=True)
    try:
        updated = storage.bank().update_folder(folder_id, fields)
    except NotFound as e:
        raise HTTPException(404, str(e))
    except (InvalidMove, ValueError) as e:
        raise HTTPException(400, str(e))
    if not updated:
        raise HTTPException(404, "Folder not found")
    return updated.to_record()


@router.delete("/folders/{folder_id}")
async def delete_folder(folder_id: str, drop_questions: bool = False):
    """Delete a folder and its subfolders. Their questions become unfiled
    unless drop_questions is set."""
    result = storage.bank().delete_folder(folder_id, drop_questions=drop_questions)
    if result is None:
        raise HTTPException(404, "Folder not found")
    return result.to_record()


@router.get("/folders/{folder_id}/questions")
async def folder_questions(folder_id: str):
    """Questions filed directly in a folder."""
    if storage.bank().folders.get(folder_id) is None:
        raise HTTPException(404, "Folder not found")
    return [q.to_record() for q in storage.bank().questions.by_folder(folder_id)]


@router.get("/folders/{folder_id}/playlist")
async def folder_playlist(folder_id: str):
    """Every question in the folder's subtree, in play order."""
    if storage.bank().folders.get(folder_id) is None:
        raise HTTPException(404, "Folder not found")
    return [q.to_record() for q in storage.bank().playlist.all_questions_under(folder_id)]
