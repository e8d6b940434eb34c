"""Pydantic schemas for the template editor API."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TemplateSavedSchema(BaseModel):
    template_id: str


class TemplatePreviewSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str
    question_count: int


class TemplateSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    question_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TemplateListSchema(BaseModel):
    items: list[TemplateSummarySchema]
    page: int
    page_size: int
    total: int
    page_count: int


class ValidationErrorSchema(BaseModel):
    detail: str
    errors: dict[str, str]
