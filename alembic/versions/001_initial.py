"""Initial tables: assessment templates, questions, choices, scale labels.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "assessment_templates",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assessment_templates_owner_id"), "assessment_templates", ["owner_id"], unique=False)
    op.create_index(op.f("ix_assessment_templates_updated_at"), "assessment_templates", ["updated_at"], unique=False)

    op.create_table(
        "assessment_questions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("template_id", sa.String(36), nullable=False),
        sa.Column("question_type", sa.String(32), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("score_weight", sa.Float(), nullable=False, server_default="1"),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("scale_min", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("scale_max", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("scale_variant", sa.String(16), nullable=False, server_default="number"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["assessment_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assessment_questions_template_id"), "assessment_questions", ["template_id"], unique=False)

    op.create_table(
        "assessment_question_choices",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("question_id", sa.String(36), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["assessment_questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_assessment_question_choices_question_id"), "assessment_question_choices", ["question_id"], unique=False
    )

    op.create_table(
        "assessment_scale_labels",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("question_id", sa.String(36), nullable=False),
        sa.Column("scale_value", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(["question_id"], ["assessment_questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("question_id", "scale_value", name="uq_scale_label_value"),
    )
    op.create_index(op.f("ix_assessment_scale_labels_question_id"), "assessment_scale_labels", ["question_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_assessment_scale_labels_question_id"), table_name="assessment_scale_labels")
    op.drop_table("assessment_scale_labels")
    op.drop_index(op.f("ix_assessment_question_choices_question_id"), table_name="assessment_question_choices")
    op.drop_table("assessment_question_choices")
    op.drop_index(op.f("ix_assessment_questions_template_id"), table_name="assessment_questions")
    op.drop_table("assessment_questions")
    op.drop_index(op.f("ix_assessment_templates_updated_at"), table_name="assessment_templates")
    op.drop_index(op.f("ix_assessment_templates_owner_id"), table_name="assessment_templates")
    op.drop_table("assessment_templates")
