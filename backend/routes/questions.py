"""Question CRUD endpoints.

Created and edited questions must pass the same record check as an import
(matching words pair up, one answer per ___ blank, ...). The check runs on the
full record that would be stored, so a PATCH is judged after merging.
"""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from backend import storage
from kids_english import Question
from kids_english.importer import ValidationFailure, check_record

router = APIRouter()


def _require_valid(question: Question) -> None:
    outcome = check_record(question.to_record())
    if isinstance(outcome, ValidationFailure):
        raise HTTPException(422, outcome.reason)


@router.get("/questions")
async def list_questions():
    """List every question."""
    return [q.to_record() for q in storage.bank().questions.list_questions()]


@router.get("/questions/unfiled")
async def unfiled_questions():
    """Questions that are not in any folder."""
    return [q.to_record() for q in storage.bank().questions.by_folder(None)]


@router.post("/questions", status_code=201)
async def create_question(body: dict):
    """Add a question. The body is a question record without id/createdAt."""
    try:
        _require_valid(storage.bank().questions.build(body))
        question = storage.bank().add_question(body)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    return question.to_record()


@router.get("/questions/{question_id}")
async def get_question(question_id: str):
    """Get a single question by id."""
    question = storage.bank().questions.get(question_id)
    if not question:
        raise HTTPException(404, "Question not found")
    return question.to_record()


@router.patch("/questions/{question_id}")
async def update_question(question_id: str, body: dict):
    """Merge fields into a question. Changing type replaces the type fields."""
    try:
        merged = storage.bank().questions.merged(question_id, body)
        if not merged:
            raise HTTPException(404, "Question not found")
        _require_valid(merged)
        updated = storage.bank().update_question(question_id, body)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    if not updated:
        raise HTTPException(404, "Question not found")
    return updated.to_record()


@router.delete("/questions/{question_id}")
async def delete_question(question_id: str):
    """Delete a question."""
    if not storage.bank().delete_question(question_id):
        raise HTTPException(404, "Question not found")
    return {"ok": True}
