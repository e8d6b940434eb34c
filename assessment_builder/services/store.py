"""Backing-store contract used by the editor, and its SQLAlchemy implementation."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Protocol, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assessment_builder.models import (
    AssessmentQuestion,
    AssessmentQuestionChoice,
    AssessmentScaleLabel,
    AssessmentTemplate,
)
from assessment_builder.services.errors import StoreError, TemplateNotFoundError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@dataclass(frozen=True)
class SavedQuestion:
    """Identifier the store assigned to an inserted question, with the position it was sent with."""

    id: str
    position: int


class TemplateStore(Protocol):
    def transaction(self) -> Any: ...

    async def read_template(self, template_id: str) -> Any | None: ...

    async def read_questions_with_children(self, template_id: str) -> Sequence[Any]: ...

    async def insert_template(self, fields: Row) -> str: ...

    async def update_template(self, template_id: str, fields: Row) -> None: ...

    async def delete_questions(self, template_id: str) -> None: ...

    async def insert_questions(self, rows: list[Row]) -> list[SavedQuestion]: ...

    async def insert_choices(self, rows: list[Row]) -> None: ...

    async def insert_scale_labels(self, rows: list[Row]) -> None: ...

    async def list_templates(self, owner_id: str, offset: int, limit: int) -> tuple[list[Any], int]: ...

    async def count_questions(self, template_ids: list[str]) -> dict[str, int]: ...


class SqlAlchemyTemplateStore:
    """`TemplateStore` over an `AsyncSession`. Every SQLAlchemy failure surfaces as `StoreError`."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            message = str(getattr(exc, "orig", None) or exc)
            logger.warning("Store call %s failed: %s", operation, message)
            raise StoreError(message) from exc

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Unit of work: commit when the block finishes, roll everything back on any error."""
        try:
            yield
            async with self._guard("commit"):
                await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def read_template(self, template_id: str) -> AssessmentTemplate | None:
        async with self._guard("read_template"):
            return await self._session.get(AssessmentTemplate, template_id, populate_existing=True)

    async def read_questions_with_children(self, template_id: str) -> list[AssessmentQuestion]:
        async with self._guard("read_questions_with_children"):
            result = await self._session.execute(
                select(AssessmentQuestion)
                .where(AssessmentQuestion.template_id == template_id)
                .options(
                    selectinload(AssessmentQuestion.choices),
                    selectinload(AssessmentQuestion.scale_labels),
                )
                .order_by(AssessmentQuestion.position.asc())
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

    async def insert_template(self, fields: Row) -> str:
        async with self._guard("insert_template"):
            result = await self._session.execute(
                insert(AssessmentTemplate).returning(AssessmentTemplate.id), [fields]
            )
            return str(result.scalar_one())

    async def update_template(self, template_id: str, fields: Row) -> None:
        async with self._guard("update_template"):
            result = await self._session.execute(
                update(AssessmentTemplate)
                .where(AssessmentTemplate.id == template_id)
                .values(**fields)
                .execution_options(synchronize_session=False)
            )
        if result.rowcount == 0:
            raise TemplateNotFoundError(template_id)

    async def delete_questions(self, template_id: str) -> None:
        # choices and scale labels go with their question (ON DELETE CASCADE)
        async with self._guard("delete_questions"):
            await self._session.execute(
                delete(AssessmentQuestion)
                .where(AssessmentQuestion.template_id == template_id)
                .execution_options(synchronize_session=False)
            )

    async def insert_questions(self, rows: list[Row]) -> list[SavedQuestion]:
        if not rows:
            return []
        async with self._guard("insert_questions"):
            result = await self._session.execute(
                insert(AssessmentQuestion).returning(AssessmentQuestion.id, AssessmentQuestion.position),
                rows,
            )
            return [SavedQuestion(id=str(row.id), position=int(row.position)) for row in result.all()]

    async def insert_choices(self, rows: list[Row]) -> None:
        if not rows:
            return
        async with self._guard("insert_choices"):
            await self._session.execute(insert(AssessmentQuestionChoice), rows)

    async def insert_scale_labels(self, rows: list[Row]) -> None:
        if not rows:
            return
        async with self._guard("insert_scale_labels"):
            await self._session.execute(insert(AssessmentScaleLabel), rows)

    async def list_templates(
        self, owner_id: str, offset: int, limit: int
    ) -> tuple[list[AssessmentTemplate], int]:
        async with self._guard("list_templates"):
            total = await self._session.scalar(
                select(func.count(AssessmentTemplate.id)).where(AssessmentTemplate.owner_id == owner_id)
            )
            result = await self._session.execute(
                select(AssessmentTemplate)
                .where(AssessmentTemplate.owner_id == owner_id)
                .order_by(AssessmentTemplate.updated_at.desc(), AssessmentTemplate.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return list(result.scalars().all()), int(total or 0)

    async def count_questions(self, template_ids: list[str]) -> dict[str, int]:
        if not template_ids:
            return {}
        async with self._guard("count_questions"):
            result = await self._session.execute(
                select(AssessmentQuestion.template_id, func.count(AssessmentQuestion.id).label("cnt"))
                .where(AssessmentQuestion.template_id.in_(template_ids))
                .group_by(AssessmentQuestion.template_id)
            )
            return {str(t): int(c) for (t, c) in result.all()}
