"""Bulk import endpoints: preview, commit, file upload, example documents."""

from typing import Any

from fastapi import APIRouter, File, HTTPException, UploadFile

from backend import storage
from kids_english import DocumentError
from kids_english.importer import parse_document
from kids_english.samples import example_document

router = APIRouter()


@router.post("/import/preview")
async def preview_import(body: list[Any]):
    """Classify records and folder paths without changing anything."""
    return storage.bank().analyze_import(body).to_record()


@router.post("/import/commit")
async def commit_import(body: list[Any]):
    """Import every valid record, creating folders from folderName paths."""
    result = storage.bank().commit_import(body)
    return {**result.to_record(), "message": result.summary()}


@router.post("/import/upload")
async def upload_import(file: UploadFile = File(...)):
    """Parse an uploaded JSON document and preview it.

    The parsed records are returned alongside the preview so the client can
    send the same list to /import/commit.
    """
    try:
        records = parse_document(await file.read())
    except DocumentError as e:
        raise HTTPException(400, str(e))
    preview = storage.bank().analyze_import(records)
    return {"preview": preview.to_record(), "records": records}


@router.get("/import/examples/{kind}")
async def get_example(kind: str):
    """Download an example import document for one question type (or "mixed")."""
    try:
        return example_document(kind)
    except KeyError:
        raise HTTPException(404, f"No example document for '{kind}'")
