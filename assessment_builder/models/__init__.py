from assessment_builder.models.template import AssessmentTemplate
from assessment_builder.models.question import AssessmentQuestion
from assessment_builder.models.choice import AssessmentQuestionChoice
from assessment_builder.models.scale_label import AssessmentScaleLabel

__all__ = ["AssessmentTemplate", "AssessmentQuestion", "AssessmentQuestionChoice", "AssessmentScaleLabel"]
