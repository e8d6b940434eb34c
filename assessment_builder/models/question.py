"""Question model: one row per question; `position` is the template order."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from assessment_builder.db.session import Base
from assessment_builder.models._ids import new_id


class AssessmentQuestion(Base):
    __tablename__ = "assessment_questions"

    id = Column(String(36), primary_key=True, default=new_id)
    template_id = Column(
        String(36),
        ForeignKey("assessment_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_type = Column(String(32), nullable=False)  # single_choice | multi_choice | scale
    prompt = Column(Text, nullable=False)
    details = Column(Text, nullable=True)
    score_weight = Column(Float, nullable=False, default=1, server_default="1")
    position = Column(Integer, nullable=False)  # 0-based
    scale_min = Column(Integer, nullable=False, default=1, server_default="1")
    scale_max = Column(Integer, nullable=False, default=5, server_default="5")
    scale_variant = Column(String(16), nullable=False, default="number", server_default="number")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    template = relationship("AssessmentTemplate", back_populates="questions")
    choices = relationship("AssessmentQuestionChoice", back_populates="question", passive_deletes=True)
    scale_labels = relationship("AssessmentScaleLabel", back_populates="question", passive_deletes=True)
