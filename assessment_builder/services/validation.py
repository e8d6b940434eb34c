"""Submit-time checks for a template draft, keyed by dotted field path."""
import math

from assessment_builder.services.drafts import TemplateDraft
from assessment_builder.services.errors import DraftValidationError

FormErrors = dict[str, str]


def question_path(index: int, key: str = "") -> str:
    return f"questions.{index}.{key}" if key else f"questions.{index}"


def validate_draft(draft: TemplateDraft) -> FormErrors:
    """Collect every rule violation; an empty dict means the draft can be saved."""
    errors: FormErrors = {}

    if not draft.name.strip():
        errors["templateName"] = "Template name is required."

    if len(draft.questions) == 0:
        errors["questions"] = "Add at least one question."

    for index, question in enumerate(draft.questions):
        if not question.prompt.strip():
            errors[question_path(index, "prompt")] = "Prompt is required."

        weight = question.score_weight
        if not isinstance(weight, (int, float)) or not math.isfinite(weight) or weight < 0:
            errors[question_path(index, "scoreWeight")] = "Score weight must be zero or positive."

        if question.uses_choices and len(question.choices) < 2:
            errors[question_path(index, "choices")] = "Provide at least two options."

        if question.uses_scale and question.scale_min >= question.scale_max:
            errors[question_path(index, "scale")] = "Maximum must be greater than minimum."

    return errors


def ensure_valid(draft: TemplateDraft) -> None:
    errors = validate_draft(draft)
    if errors:
        raise DraftValidationError(errors)
