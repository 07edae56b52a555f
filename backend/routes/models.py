"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateFolder(CamelBody):
    name: str
    color: str | None = None
    parent_id: str | None = None


class UpdateFolder(CamelBody):
    name: str | None = None
    color: str | None = None
    parent_id: str | None = None


class ResolvePath(BaseModel):
    path: str
