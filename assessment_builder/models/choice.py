"""Choice model: answer option of a choice question; `value` doubles as display order."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from assessment_builder.db.session import Base
from assessment_builder.models._ids import new_id


class AssessmentQuestionChoice(Base):
    __tablename__ = "assessment_question_choices"

    id = Column(String(36), primary_key=True, default=new_id)
    question_id = Column(
        String(36),
        ForeignKey("assessment_questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    value = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    question = relationship("AssessmentQuestion", back_populates="choices")
