"""Add categories, cards, bundles and card_bundles tables for the feed.

Revision ID: 20261019100000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019100000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["categories.id"],
            name=op.f("fk_categories_parent_id_categories"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_categories")),
    )
    op.create_index(op.f("ix_categories_parent_id"), "categories", ["parent_id"])

    op.create_table(
        "cards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _created_at(),
        sa.Column("card_type", sa.String(length=32), nullable=False, server_default="CARD_QUESTION"),
        sa.Column("writer_id", sa.Integer(), nullable=False),
        sa.Column("feed_title", sa.String(length=255), nullable=False),
        sa.Column("feed_content", sa.Text(), nullable=False, server_default=""),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("scrap_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(
            ["writer_id"],
            ["users.id"],
            name=op.f("fk_cards_writer_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name=op.f("fk_cards_category_id_categories"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cards")),
    )
    op.create_index(op.f("ix_cards_writer_id"), "cards", ["writer_id"])
    op.create_index(op.f("ix_cards_category_id"), "cards", ["category_id"])

    op.create_table(
        "bundles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _created_at(),
        sa.Column("writer_id", sa.Integer(), nullable=False),
        sa.Column("feed_title", sa.String(length=255), nullable=False),
        sa.Column("feed_content", sa.Text(), nullable=False, server_default=""),
        sa.Column("thumbnail", sa.String(length=1024), nullable=True),
        sa.Column("thumbnail_text", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(
            ["writer_id"],
            ["users.id"],
            name=op.f("fk_bundles_writer_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_bundles")),
    )
    op.create_index(op.f("ix_bundles_writer_id"), "bundles", ["writer_id"])

    op.create_table(
        "card_bundles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bundle_id", sa.Integer(), nullable=False),
        sa.Column("card_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["bundle_id"],
            ["bundles.id"],
            name=op.f("fk_card_bundles_bundle_id_bundles"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["card_id"],
            ["cards.id"],
            name=op.f("fk_card_bundles_card_id_cards"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_card_bundles")),
    )
    op.create_index(op.f("ix_card_bundles_bundle_id"), "card_bundles", ["bundle_id"])
    op.create_index(op.f("ix_card_bundles_card_id"), "card_bundles", ["card_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_card_bundles_card_id"), table_name="card_bundles")
    op.drop_index(op.f("ix_card_bundles_bundle_id"), table_name="card_bundles")
    op.drop_table("card_bundles")
    op.drop_index(op.f("ix_bundles_writer_id"), table_name="bundles")
    op.drop_table("bundles")
    op.drop_index(op.f("ix_cards_category_id"), table_name="cards")
    op.drop_index(op.f("ix_cards_writer_id"), table_name="cards")
    op.drop_table("cards")
    op.drop_index(op.f("ix_categories_parent_id"), table_name="categories")
    op.drop_table("categories")
