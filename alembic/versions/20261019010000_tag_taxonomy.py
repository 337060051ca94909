"""Tag categories and tags with audit columns.

Revision ID: 20261019010000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019010000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("updated_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("deleted_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "tag_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tag_categories_slug"), "tag_categories", ["slug"], unique=True)
    op.create_index(op.f("ix_tag_categories_deleted_at"), "tag_categories", ["deleted_at"])

    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["category_id"], ["tag_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", "category_id", name="uq_tags_slug_category"),
    )
    op.create_index(op.f("ix_tags_slug"), "tags", ["slug"])
    op.create_index(op.f("ix_tags_category_id"), "tags", ["category_id"])
    op.create_index(op.f("ix_tags_deleted_at"), "tags", ["deleted_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_tags_deleted_at"), table_name="tags")
    op.drop_index(op.f("ix_tags_category_id"), table_name="tags")
    op.drop_index(op.f("ix_tags_slug"), table_name="tags")
    op.drop_table("tags")
    op.drop_index(op.f("ix_tag_categories_deleted_at"), table_name="tag_categories")
    op.drop_index(op.f("ix_tag_categories_slug"), table_name="tag_categories")
    op.drop_table("tag_categories")
