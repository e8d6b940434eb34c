"""Scale label model: optional caption for one value of a scale question."""
from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from assessment_builder.db.session import Base
from assessment_builder.models._ids import new_id


class AssessmentScaleLabel(Base):
    __tablename__ = "assessment_scale_labels"
    __table_args__ = (UniqueConstraint("question_id", "scale_value", name="uq_scale_label_value"),)

    id = Column(String(36), primary_key=True, default=new_id)
    question_id = Column(
        String(36),
        ForeignKey("assessment_questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    scale_value = Column(Integer, nullable=False)
    label = Column(String(255), nullable=True)

    question = relationship("AssessmentQuestion", back_populates="scale_labels")
