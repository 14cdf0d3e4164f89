"""document registry core

Revision ID: f1a2b3c4d5e6
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from alembic import op
import sqlalchemy as sa

revision = "f1a2b3c4d5e6"
down_revision = None
branch_labels = None
depends_on = None


def _document_columns():
    return [
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("creator", sa.String(length=255), nullable=False),
        sa.Column("digest", sa.String(), nullable=False),
        sa.Column("descriptor", sa.String(), nullable=False),
        sa.Column("classification", sa.String(length=20), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("updated_at", sa.BigInteger(), nullable=False),
    ]


def upgrade() -> None:
    # --- Documents (primary and secondary share one schema) ---
    op.create_table(
        "documents",
        *_document_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_documents_creator", "documents", ["creator"])

    op.create_table(
        "secondary_documents",
        *_document_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_secondary_documents_creator", "secondary_documents", ["creator"]
    )

    # --- Access grants ---
    op.create_table(
        "access_grants",
        sa.Column("document_id", sa.Integer(), nullable=False),
        sa.Column("grantee", sa.String(length=255), nullable=False),
        sa.Column(
            "permission_type",
            sa.Enum("view", "edit", "full", name="permissiontype"),
            nullable=False,
        ),
        sa.Column("granted_at", sa.BigInteger(), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.Column("modification_allowed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["document_id"], ["documents.id"]),
        sa.PrimaryKeyConstraint("document_id", "grantee"),
    )

    # --- Shared id counter ---
    counter = op.create_table(
        "registry_counter",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.bulk_insert(counter, [{"id": 1, "value": 0}])


def downgrade() -> None:
    op.drop_table("registry_counter")
    op.drop_table("access_grants")
    op.drop_index("ix_secondary_documents_creator", table_name="secondary_documents")
    op.drop_table("secondary_documents")
    op.drop_index("ix_documents_creator", table_name="documents")
    op.drop_table("documents")
    sa.Enum(name="permissiontype").drop(op.get_bind(), checkfirst=True)
