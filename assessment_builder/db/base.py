"""SQLAlchemy declarative base and model imports for Alembic."""
from assessment_builder.db.session import Base

# Import all models so Alembic can see them
from assessment_builder.models.template import AssessmentTemplate  # noqa: F401
from assessment_builder.models.question import AssessmentQuestion  # noqa: F401
from assessment_builder.models.choice import AssessmentQuestionChoice  # noqa: F401
from assessment_builder.models.scale_label import AssessmentScaleLabel  # noqa: F401

__all__ = ["Base", "AssessmentTemplate", "AssessmentQuestion", "AssessmentQuestionChoice", "AssessmentScaleLabel"]
