"""Template preview card data and the owner's template listing."""
from dataclasses import dataclass
from datetime import datetime

from assessment_builder.core.config import get_settings
from assessment_builder.services.drafts import TemplateDraft
from assessment_builder.services.store import TemplateStore

UNTITLED_NAME = "Untitled assessment"


@dataclass(frozen=True)
class TemplatePreview:
    name: str
    description: str
    question_count: int


@dataclass(frozen=True)
class TemplateSummary:
    id: str
    name: str
    description: str | None
    question_count: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class TemplatePage:
    items: list[TemplateSummary]
    page: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        return max(1, -(-self.total // self.page_size))


def template_preview(draft: TemplateDraft) -> TemplatePreview:
    """Return what the side card shows while editing."""
    return TemplatePreview(
        name=draft.name or UNTITLED_NAME,
        description=draft.description,
        question_count=len(draft.questions),
    )


async def list_owner_templates(store: TemplateStore, owner_id: str, page: int = 1) -> TemplatePage:
    """Return one page of the owner's templates, most recently updated first."""
    page_size = get_settings().page_size
    page = max(1, page)
    rows, total = await store.list_templates(owner_id, offset=(page - 1) * page_size, limit=page_size)
    counts = await store.count_questions([str(row.id) for row in rows])
    items = [
        TemplateSummary(
            id=str(row.id),
            name=row.name,
            description=row.description,
            question_count=counts.get(str(row.id), 0),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
        for row in rows
    ]
    return TemplatePage(items=items, page=page, page_size=page_size, total=total)
