from assessment_builder.services.drafts import TemplateDraft, new_template_draft
from assessment_builder.services.editor import EditorSession, EditorState, OutcomeKind, SubmitOutcome
from assessment_builder.services.hydration import hydrate_template
from assessment_builder.services.persistence import save_template
from assessment_builder.services.preview import list_owner_templates, template_preview
from assessment_builder.services.store import SqlAlchemyTemplateStore, TemplateStore
from assessment_builder.services.validation import validate_draft

__all__ = [
    "EditorSession",
    "EditorState",
    "OutcomeKind",
    "SqlAlchemyTemplateStore",
    "SubmitOutcome",
    "TemplateDraft",
    "TemplateStore",
    "hydrate_template",
    "list_owner_templates",
    "new_template_draft",
    "save_template",
    "template_preview",
    "validate_draft",
]
