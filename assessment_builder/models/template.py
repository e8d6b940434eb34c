"""Template model: name/description header owning an ordered list of questions."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from assessment_builder.db.session import Base
from assessment_builder.models._ids import new_id


class AssessmentTemplate(Base):
    __tablename__ = "assessment_templates"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Opaque id from the identity provider (no FK)
    owner_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    questions = relationship(
        "AssessmentQuestion",
        back_populates="template",
        order_by="AssessmentQuestion.position",
        passive_deletes=True,
    )
