"""In-memory template drafts and the commands that edit them.

Drafts are frozen pydantic models holding tuples, so a command never edits a
draft in place: it returns a new `TemplateDraft` that shares every untouched
question/choice with the old one. When a command has nothing to do (unknown
id, duplicate scale value) the very same draft object is returned, which lets
callers detect "no change" with an identity check.

A question carries both its choice list and its scale configuration whatever
its current `type`. Switching a question from `single_choice` to `scale` and
back therefore keeps the options the author already typed; persistence only
writes the part that matches the type at save time.
"""
from __future__ import annotations

import uuid
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict

from assessment_builder.core.config import get_settings

QuestionType = Literal["single_choice", "multi_choice", "scale"]
ScaleVariant = Literal["number", "stars", "hearts"]

CHOICE_TYPES = frozenset({"single_choice", "multi_choice"})

QUESTION_FIELDS = frozenset(
    {
        "type",
        "prompt",
        "details",
        "score_weight",
        "choices",
        "scale_min",
        "scale_max",
        "scale_variant",
        "scale_labels",
    }
)
CHOICE_FIELDS = frozenset({"label", "description", "value"})


class ChoiceDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    description: str = ""
    value: float


class ScaleLabelDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int
    label: str = ""


class QuestionDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType = "single_choice"
    prompt: str = ""
    details: str = ""
    score_weight: float = 1
    choices: tuple[ChoiceDraft, ...] = ()
    scale_min: int = 1
    scale_max: int = 5
    scale_variant: ScaleVariant = "number"
    scale_labels: tuple[ScaleLabelDraft, ...] = ()

    @property
    def uses_choices(self) -> bool:
        return self.type in CHOICE_TYPES

    @property
    def uses_scale(self) -> bool:
        return self.type == "scale"


class TemplateDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    questions: tuple[QuestionDraft, ...] = ()


def _local_id() -> str:
    return str(uuid.uuid4())


def create_empty_question(order: int) -> QuestionDraft:
    """Default question: single choice with two placeholder options."""
    settings = get_settings()
    return QuestionDraft(
        id=f"question-{order}-{_local_id()}",
        type="single_choice",
        score_weight=1,
        choices=(
            ChoiceDraft(id=_local_id(), label="Option A", value=1),
            ChoiceDraft(id=_local_id(), label="Option B", value=2),
        ),
        scale_min=settings.default_scale_min,
        scale_max=settings.default_scale_max,
        scale_variant=settings.default_scale_variant,
    )


def new_template_draft() -> TemplateDraft:
    """Starting point for a template that does not exist yet."""
    return TemplateDraft(questions=(create_empty_question(0),))


def question_index(draft: TemplateDraft, question_id: str) -> int | None:
    for index, question in enumerate(draft.questions):
        if question.id == question_id:
            return index
    return None


def _mutate_question(
    draft: TemplateDraft,
    question_id: str,
    updater: Callable[[QuestionDraft], QuestionDraft],
) -> TemplateDraft:
    index = question_index(draft, question_id)
    if index is None:
        return draft
    question = draft.questions[index]
    updated = updater(question)
    if updated is question:
        return draft
    questions = draft.questions[:index] + (updated,) + draft.questions[index + 1 :]
    return draft.model_copy(update={"questions": questions})


def _replace(model: BaseModel, fields: dict[str, Any]) -> Any:
    """Copy a frozen model with `fields` applied, re-running field validation."""
    return type(model)(**{**dict(model), **fields})


# ---------- template metadata ----------

def set_template_name(draft: TemplateDraft, name: str) -> TemplateDraft:
    return draft.model_copy(update={"name": name})


def set_template_description(draft: TemplateDraft, description: str) -> TemplateDraft:
    return draft.model_copy(update={"description": description})


# ---------- questions ----------

def add_question(draft: TemplateDraft) -> TemplateDraft:
    question = create_empty_question(len(draft.questions))
    return draft.model_copy(update={"questions": draft.questions + (question,)})


def remove_question(draft: TemplateDraft, question_id: str) -> TemplateDraft:
    if question_index(draft, question_id) is None:
        return draft
    questions = tuple(q for q in draft.questions if q.id != question_id)
    return draft.model_copy(update={"questions": questions})


def update_question(draft: TemplateDraft, question_id: str, **fields: Any) -> TemplateDraft:
    """Merge `fields` into one question.

    Changing `type` leaves choices and scale settings untouched.
    """
    unknown = set(fields) - QUESTION_FIELDS
    if unknown:
        raise ValueError(f"Unknown question fields: {', '.join(sorted(unknown))}")
    if not fields:
        return draft
    return _mutate_question(draft, question_id, lambda q: _replace(q, fields))


# ---------- choices ----------

def add_choice(draft: TemplateDraft, question_id: str) -> TemplateDraft:
    def _add(question: QuestionDraft) -> QuestionDraft:
        next_value = max((c.value for c in question.choices), default=0) + 1
        choice = ChoiceDraft(
            id=_local_id(),
            label=f"Option {len(question.choices) + 1}",
            value=next_value,
        )
        return question.model_copy(update={"choices": question.choices + (choice,)})

    return _mutate_question(draft, question_id, _add)


def update_choice(draft: TemplateDraft, question_id: str, choice_id: str, **fields: Any) -> TemplateDraft:
    unknown = set(fields) - CHOICE_FIELDS
    if unknown:
        raise ValueError(f"Unknown choice fields: {', '.join(sorted(unknown))}")

    def _update(question: QuestionDraft) -> QuestionDraft:
        if not any(c.id == choice_id for c in question.choices):
            return question
        choices = tuple(_replace(c, fields) if c.id == choice_id else c for c in question.choices)
        return question.model_copy(update={"choices": choices})

    return _mutate_question(draft, question_id, _update)


def remove_choice(draft: TemplateDraft, question_id: str, choice_id: str) -> TemplateDraft:
    def _remove(question: QuestionDraft) -> QuestionDraft:
        choices = tuple(c for c in question.choices if c.id != choice_id)
        if len(choices) == len(question.choices):
            return question
        return question.model_copy(update={"choices": choices})

    return _mutate_question(draft, question_id, _remove)


# ---------- scale labels ----------

def add_scale_label(draft: TemplateDraft, question_id: str, value: int, label: str = "") -> TemplateDraft:
    """Add a caption slot for `value`; a value that already has one is left alone."""

    def _add(question: QuestionDraft) -> QuestionDraft:
        if any(entry.value == value for entry in question.scale_labels):
            return question
        entry = ScaleLabelDraft(value=value, label=label)
        return question.model_copy(update={"scale_labels": question.scale_labels + (entry,)})

    return _mutate_question(draft, question_id, _add)


def update_scale_label(draft: TemplateDraft, question_id: str, value: int, label: str) -> TemplateDraft:
    def _update(question: QuestionDraft) -> QuestionDraft:
        if not any(entry.value == value for entry in question.scale_labels):
            return question
        labels = tuple(
            entry.model_copy(update={"label": label}) if entry.value == value else entry
            for entry in question.scale_labels
        )
        return question.model_copy(update={"scale_labels": labels})

    return _mutate_question(draft, question_id, _update)


def remove_scale_label(draft: TemplateDraft, question_id: str, value: int) -> TemplateDraft:
    def _remove(question: QuestionDraft) -> QuestionDraft:
        labels = tuple(entry for entry in question.scale_labels if entry.value != value)
        if len(labels) == len(question.scale_labels):
            return question
        return question.model_copy(update={"scale_labels": labels})

    return _mutate_question(draft, question_id, _remove)


def next_free_scale_value(question: QuestionDraft) -> int | None:
    """Lowest value in [scale_min, scale_max] without a label, or None when all are taken."""
    taken = {entry.value for entry in question.scale_labels}
    for value in range(question.scale_min, question.scale_max + 1):
        if value not in taken:
            return value
    return None
