"""Editor session: load -> edit -> validate -> save for one template draft.

A session owns its draft exclusively. Commands swap in the new draft returned
by `services.drafts` and clear the validation messages for the fields they
touch. Lifecycle::

    idle -> hydrating -> ready -> submitting -> done
                  |         ^          |
                  v         +----------+  (validation, auth or store failure)
               failed

Loading and submitting may suspend on the store; a session disposed while
hydration is in flight ignores the late result.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from assessment_builder.core.security import ANONYMOUS, Identity
from assessment_builder.services import drafts
from assessment_builder.services.drafts import TemplateDraft
from assessment_builder.services.errors import AuthorizationError, EditorError, EditorStateError
from assessment_builder.services.hydration import hydrate_template
from assessment_builder.services.persistence import save_template
from assessment_builder.services.preview import TemplatePreview, template_preview
from assessment_builder.services.store import TemplateStore
from assessment_builder.services.validation import FormErrors, question_path, validate_draft

logger = logging.getLogger(__name__)

# update_question field -> error keys (relative to questions.<i>) it makes stale
FIELD_ERROR_KEYS = {
    "prompt": ("prompt",),
    "score_weight": ("scoreWeight",),
    "type": ("choices", "scale"),
    "choices": ("choices",),
    "scale_min": ("scale",),
    "scale_max": ("scale",),
    "scale_labels": ("scale",),
}


def _shift_question_errors(errors: FormErrors, removed: int) -> FormErrors:
    """Drop the removed question's messages and move later ones up one index."""
    shifted: FormErrors = {}
    for key, message in errors.items():
        parts = key.split(".", 2)
        if parts[0] != "questions" or len(parts) < 2 or not parts[1].isdigit():
            shifted[key] = message
            continue
        index = int(parts[1])
        if index == removed:
            continue
        if index > removed:
            parts[1] = str(index - 1)
        shifted[".".join(parts)] = message
    return shifted


class EditorState(str, enum.Enum):
    IDLE = "idle"
    HYDRATING = "hydrating"
    READY = "ready"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"


class OutcomeKind(str, enum.Enum):
    SAVED = "saved"
    INVALID = "invalid"
    UNAUTHORIZED = "unauthorized"
    STORE_ERROR = "store_error"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SubmitOutcome:
    kind: OutcomeKind
    template_id: str | None = None
    errors: FormErrors = field(default_factory=dict)
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SAVED


class EditorSession:
    def __init__(
        self,
        store: TemplateStore,
        template_id: str | None = None,
        identity: Identity = ANONYMOUS,
        on_saved: Callable[[str], None] | None = None,
        on_failed: Callable[[str], None] | None = None,
    ):
        self.store = store
        self.template_id = template_id
        self.identity = identity
        self.state = EditorState.IDLE
        self.load_error: str | None = None
        self.load_error_code: int | None = None
        self.submit_error: str | None = None
        self._draft: TemplateDraft | None = None
        self._errors: FormErrors = {}
        self._disposed = False
        self._on_saved = on_saved
        self._on_failed = on_failed

    # ---------- state ----------

    @property
    def draft(self) -> TemplateDraft | None:
        return self._draft

    @property
    def form_errors(self) -> FormErrors:
        return dict(self._errors)

    @property
    def is_submitting(self) -> bool:
        return self.state is EditorState.SUBMITTING

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def preview(self) -> TemplatePreview | None:
        return template_preview(self._draft) if self._draft is not None else None

    def dispose(self) -> None:
        """Abandon the session; no autosave, pending results are dropped."""
        self._disposed = True
        self._draft = None

    def _require_ready(self) -> TemplateDraft:
        if self._disposed:
            raise EditorStateError("Editor session has been disposed.")
        if self.state is not EditorState.READY or self._draft is None:
            raise EditorStateError(f"Editor is {self.state.value}; edits are not accepted.")
        return self._draft

    # ---------- loading ----------

    async def load(self, draft: TemplateDraft | None = None) -> None:
        """Start editing: hydrate `template_id`, or begin from `draft` / a fresh default draft."""
        if self.state is not EditorState.IDLE:
            raise EditorStateError(f"Editor is already {self.state.value}.")
        if self.template_id is None:
            self._draft = draft if draft is not None else drafts.new_template_draft()
            self.state = EditorState.READY
            return

        self.state = EditorState.HYDRATING
        try:
            loaded = await hydrate_template(self.store, self.template_id)
        except EditorError as exc:
            if self._disposed:
                return
            logger.warning("Failed to load template %s: %s", self.template_id, exc.detail)
            self.load_error = exc.detail
            self.load_error_code = exc.status_code
            self.state = EditorState.FAILED
            return
        except Exception:
            if self._disposed:
                return
            logger.exception("Unexpected error loading template %s", self.template_id)
            self.load_error = "Unable to load template."
            self.load_error_code = 500
            self.state = EditorState.FAILED
            return

        if self._disposed:
            logger.debug("Discarding hydration result for disposed session %s", self.template_id)
            return
        self._draft = draft if draft is not None else loaded
        self.state = EditorState.READY

    # ---------- error side channel ----------

    def clear_errors(self, *keys: str) -> None:
        if not any(key in self._errors for key in keys):
            return
        self._errors = {k: v for k, v in self._errors.items() if k not in keys}

    def _apply(self, updated: TemplateDraft, error_keys: Iterable[str] = ()) -> TemplateDraft:
        self._draft = updated
        self.clear_errors(*error_keys)
        return updated

    def _question_keys(self, question_id: str, keys: Iterable[str]) -> list[str]:
        index = drafts.question_index(self._require_ready(), question_id)
        if index is None:
            return []
        return [question_path(index, key) for key in keys]

    # ---------- commands ----------

    def set_template_name(self, name: str) -> TemplateDraft:
        return self._apply(drafts.set_template_name(self._require_ready(), name), ["templateName"])

    def set_template_description(self, description: str) -> TemplateDraft:
        return self._apply(drafts.set_template_description(self._require_ready(), description))

    def add_question(self) -> TemplateDraft:
        return self._apply(drafts.add_question(self._require_ready()), ["questions"])

    def remove_question(self, question_id: str) -> TemplateDraft:
        draft = self._require_ready()
        removed = drafts.question_index(draft, question_id)
        updated = self._apply(drafts.remove_question(draft, question_id))
        if removed is not None:
            self._errors = _shift_question_errors(self._errors, removed)
        return updated

    def update_question(
        self, question_id: str, error_keys: Iterable[str] | None = None, **fields
    ) -> TemplateDraft:
        if error_keys is None:
            error_keys = [key for name in fields for key in FIELD_ERROR_KEYS.get(name, ())]
        keys = self._question_keys(question_id, error_keys)
        return self._apply(drafts.update_question(self._require_ready(), question_id, **fields), keys)

    def add_choice(self, question_id: str) -> TemplateDraft:
        keys = self._question_keys(question_id, ["choices"])
        return self._apply(drafts.add_choice(self._require_ready(), question_id), keys)

    def update_choice(self, question_id: str, choice_id: str, **fields) -> TemplateDraft:
        keys = self._question_keys(question_id, ["choices"])
        return self._apply(drafts.update_choice(self._require_ready(), question_id, choice_id, **fields), keys)

    def remove_choice(self, question_id: str, choice_id: str) -> TemplateDraft:
        keys = self._question_keys(question_id, ["choices"])
        return self._apply(drafts.remove_choice(self._require_ready(), question_id, choice_id), keys)

    def add_scale_label(self, question_id: str, value: int, label: str = "") -> TemplateDraft:
        keys = self._question_keys(question_id, ["scale"])
        return self._apply(drafts.add_scale_label(self._require_ready(), question_id, value, label), keys)

    def update_scale_label(self, question_id: str, value: int, label: str) -> TemplateDraft:
        keys = self._question_keys(question_id, ["scale"])
        return self._apply(drafts.update_scale_label(self._require_ready(), question_id, value, label), keys)

    def remove_scale_label(self, question_id: str, value: int) -> TemplateDraft:
        keys = self._question_keys(question_id, ["scale"])
        return self._apply(drafts.remove_scale_label(self._require_ready(), question_id, value), keys)

    # ---------- submit ----------

    def _fail(self, kind: OutcomeKind, message: str) -> SubmitOutcome:
        self.submit_error = message
        self.state = EditorState.READY
        if self._on_failed is not None:
            self._on_failed(message)
        return SubmitOutcome(kind=kind, message=message)

    async def submit(self) -> SubmitOutcome:
        """Validate and save. Failures come back as a `SubmitOutcome`; the draft is kept for retry."""
        if self.state is EditorState.SUBMITTING:
            raise EditorStateError("A submit is already in progress.")
        draft = self._require_ready()

        self.submit_error = None
        self.state = EditorState.SUBMITTING

        errors = validate_draft(draft)
        self._errors = errors
        if errors:
            logger.info("Submit blocked by %d validation error(s)", len(errors))
            self.state = EditorState.READY
            return SubmitOutcome(kind=OutcomeKind.INVALID, errors=dict(errors))

        if not self.identity.present:
            return self._fail(OutcomeKind.UNAUTHORIZED, AuthorizationError().detail)

        try:
            template_id = await save_template(self.store, draft, self.identity.owner_id, self.template_id)
        except EditorError as exc:
            logger.warning("Failed to save template %s: %s", self.template_id or "<new>", exc.detail)
            kind = OutcomeKind.NOT_FOUND if exc.status_code == 404 else OutcomeKind.STORE_ERROR
            return self._fail(kind, exc.detail)
        except Exception:
            logger.exception("Unexpected error saving template %s", self.template_id or "<new>")
            return self._fail(OutcomeKind.STORE_ERROR, "Unable to save template.")

        self.template_id = template_id
        self.state = EditorState.DONE
        self._draft = None
        if self._on_saved is not None:
            self._on_saved(template_id)
        return SubmitOutcome(kind=OutcomeKind.SAVED, template_id=template_id)
