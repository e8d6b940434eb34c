from assessment_builder.schemas.template import (
    TemplateListSchema,
    TemplatePreviewSchema,
    TemplateSavedSchema,
    TemplateSummarySchema,
    ValidationErrorSchema,
)

__all__ = [
    "TemplateListSchema",
    "TemplatePreviewSchema",
    "TemplateSavedSchema",
    "TemplateSummarySchema",
    "ValidationErrorSchema",
]
