"""Write a validated template draft to the store by replacing its whole question subtree."""
import logging
from datetime import datetime, timezone

from assessment_builder.services.drafts import QuestionDraft, TemplateDraft
from assessment_builder.services.errors import StoreError
from assessment_builder.services.store import Row, TemplateStore

logger = logging.getLogger(__name__)


def _blank_to_none(value: str) -> str | None:
    return value.strip() or None


def template_fields(draft: TemplateDraft) -> Row:
    return {"name": draft.name.strip(), "description": _blank_to_none(draft.description)}


def question_row(template_id: str, question: QuestionDraft, position: int) -> Row:
    return {
        "template_id": template_id,
        "question_type": question.type,
        "prompt": question.prompt.strip(),
        "details": _blank_to_none(question.details),
        "score_weight": question.score_weight,
        "position": position,
        "scale_min": question.scale_min,
        "scale_max": question.scale_max,
        "scale_variant": question.scale_variant,
    }


def child_rows(question: QuestionDraft, question_id: str) -> tuple[list[Row], list[Row]]:
    """Choice rows for choice questions, scale-label rows for scale questions; never both."""
    choices: list[Row] = []
    labels: list[Row] = []
    if question.uses_choices:
        choices = [
            {
                "question_id": question_id,
                "label": choice.label.strip(),
                "description": _blank_to_none(choice.description),
                "value": choice.value,
            }
            for choice in question.choices
        ]
    if question.uses_scale:
        labels = [
            {
                "question_id": question_id,
                "scale_value": entry.value,
                "label": _blank_to_none(entry.label),
            }
            for entry in question.scale_labels
        ]
    return choices, labels


async def save_template(
    store: TemplateStore,
    draft: TemplateDraft,
    owner_id: str,
    template_id: str | None = None,
) -> str:
    """Upsert the template row, then delete and reinsert every question with its children.

    Questions always get fresh identifiers; children are attached through the
    position -> id mapping returned by the store. Everything runs in one store
    transaction, so a failure leaves the previously saved template untouched.
    The draft is expected to have passed `validate_draft`.
    """
    now = datetime.now(timezone.utc)
    async with store.transaction():
        fields = template_fields(draft)
        if template_id:
            await store.update_template(template_id, {**fields, "updated_at": now})
        else:
            template_id = await store.insert_template(
                {**fields, "owner_id": owner_id, "created_at": now, "updated_at": now}
            )

        await store.delete_questions(template_id)

        saved = await store.insert_questions(
            [question_row(template_id, question, index) for index, question in enumerate(draft.questions)]
        )
        ids_by_position = {entry.position: entry.id for entry in saved}

        choice_rows: list[Row] = []
        label_rows: list[Row] = []
        for index, question in enumerate(draft.questions):
            question_id = ids_by_position.get(index)
            if question_id is None:
                raise StoreError(f"Store did not return an identifier for question at position {index}.")
            choices, labels = child_rows(question, question_id)
            choice_rows.extend(choices)
            label_rows.extend(labels)

        await store.insert_choices(choice_rows)
        await store.insert_scale_labels(label_rows)

    logger.info(
        "Saved template %s: %d question(s), %d choice(s), %d scale label(s)",
        template_id,
        len(draft.questions),
        len(choice_rows),
        len(label_rows),
    )
    return template_id
