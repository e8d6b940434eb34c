"""Build a template draft from persisted rows."""
import logging
import sys

from pydantic import ValidationError

from assessment_builder.core.config import get_settings
from assessment_builder.services.drafts import (
    ChoiceDraft,
    QuestionDraft,
    ScaleLabelDraft,
    TemplateDraft,
    create_empty_question,
)
from assessment_builder.services.errors import StoreError, TemplateNotFoundError
from assessment_builder.services.store import TemplateStore

logger = logging.getLogger(__name__)

# Choices without a value sort after every valued one
_MISSING_VALUE_KEY = sys.float_info.max


def _choice_sort_key(row) -> float:
    return row.value if row.value is not None else _MISSING_VALUE_KEY


def question_from_row(row) -> QuestionDraft:
    settings = get_settings()
    choices = [
        ChoiceDraft(
            id=str(choice.id),
            label=choice.label or "",
            description=choice.description or "",
            value=choice.value if choice.value is not None else index + 1,
        )
        for index, choice in enumerate(sorted(row.choices or [], key=_choice_sort_key))
    ]
    scale_labels = [
        ScaleLabelDraft(value=entry.scale_value, label=entry.label or "")
        for entry in sorted(row.scale_labels or [], key=lambda entry: entry.scale_value)
    ]
    return QuestionDraft(
        id=str(row.id),
        type=row.question_type,
        prompt=row.prompt or "",
        details=row.details or "",
        score_weight=row.score_weight if row.score_weight is not None else 1,
        choices=tuple(choices),
        scale_min=row.scale_min if row.scale_min is not None else settings.default_scale_min,
        scale_max=row.scale_max if row.scale_max is not None else settings.default_scale_max,
        scale_variant=row.scale_variant or settings.default_scale_variant,
        scale_labels=tuple(scale_labels),
    )


async def hydrate_template(store: TemplateStore, template_id: str) -> TemplateDraft:
    """Load a template and its questions; raises TemplateNotFoundError if the template row is missing
    and StoreError if a stored question does not form a valid draft.

    Questions come back in ascending `position` (ties keep fetch order), choices and
    scale labels in ascending value. A template with no saved questions gets one
    default question so the editor never opens empty.
    """
    logger.debug("Hydrating template %s", template_id)
    template = await store.read_template(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)

    rows = await store.read_questions_with_children(template_id)
    ordered = sorted(rows, key=lambda row: row.position if row.position is not None else 0)
    try:
        questions = tuple(question_from_row(row) for row in ordered)
    except ValidationError as exc:
        logger.warning("Template %s has an unreadable question: %s", template_id, exc)
        raise StoreError(f"Template {template_id} contains a question that cannot be edited.") from exc
    if not questions:
        questions = (create_empty_question(0),)

    logger.info("Hydrated template %s with %d question(s)", template_id, len(ordered))
    return TemplateDraft(
        name=template.name or "",
        description=template.description or "",
        questions=questions,
    )
