"""initial schema: client, dossier, document_request, document_upload, templates

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

Dossier collection tables. Status columns are constrained to their enum values;
quantity bounds on document_request are enforced by a check constraint.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "client",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("accountant_id", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("activity_type", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_client_accountant_id", "client", ["accountant_id"])

    op.create_table(
        "dossier",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("client_id", sa.String(), nullable=False),
        sa.Column("accountant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("period", sa.String(length=50), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="PENDING"),
        sa.Column("documents_requis", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("documents_upload", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pourcentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("validated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("validation_comment", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'IN_PROGRESS', 'COMPLETE', 'VALIDATED')",
            name="dossier_status_check",
        ),
    )
    op.create_index("ix_dossier_client_id", "dossier", ["client_id"])
    op.create_index("ix_dossier_accountant_id", "dossier", ["accountant_id"])
    op.create_index("ix_dossier_status", "dossier", ["status"])
    op.create_index("ix_dossier_due_date", "dossier", ["due_date"])
    op.create_index(
        "ix_dossier_accountant_status", "dossier", ["accountant_id", "status"]
    )

    op.create_table(
        "document_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("dossier_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("document_type", sa.String(length=100), nullable=False),
        sa.Column("obligatoire", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("quantite_min", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("quantite_max", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "accepted_formats", sa.String(length=255), nullable=False, server_default="*"
        ),
        sa.Column("max_size_mb", sa.Float(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="AWAITING"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["dossier_id"], ["dossier.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "dossier_id", "position", name="uq_document_request_position"
        ),
        sa.CheckConstraint(
            "quantite_min >= 1 AND quantite_min <= quantite_max",
            name="document_request_quantity_check",
        ),
        sa.CheckConstraint(
            "status IN ('AWAITING', 'RECEIVED', 'APPROVED', "
            "'REJECTED_NEEDS_REPLACEMENT', 'EXPIRED')",
            name="document_request_status_check",
        ),
    )
    op.create_index("ix_document_request_dossier_id", "document_request", ["dossier_id"])
    op.create_index(
        "ix_document_request_document_type", "document_request", ["document_type"]
    )

    op.create_table(
        "document_upload",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("request_id", sa.String(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("file_id", sa.String(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="PENDING"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("submitted_by", sa.String(), nullable=True),
        sa.Column("reviewer_comment", sa.Text(), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.String(), nullable=True),
        sa.Column("replaced_by_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["request_id"], ["document_request.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["replaced_by_id"], ["document_upload.id"], ondelete="SET NULL"
        ),
        sa.UniqueConstraint(
            "request_id", "sequence", name="uq_document_upload_sequence"
        ),
        sa.CheckConstraint(
            "status IN ('PENDING', 'IN_REVIEW', 'APPROVED', 'REJECTED', 'REPLACED')",
            name="document_upload_status_check",
        ),
    )
    op.create_index("ix_document_upload_request_id", "document_upload", ["request_id"])
    op.create_index("ix_document_upload_status", "document_upload", ["status"])

    op.create_table(
        "dossier_template",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("accountant_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_dossier_template_accountant_id", "dossier_template", ["accountant_id"]
    )

    op.create_table(
        "dossier_template_item",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("template_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("document_type", sa.String(length=100), nullable=False),
        sa.Column("obligatoire", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("quantite_min", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("quantite_max", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "accepted_formats", sa.String(length=255), nullable=False, server_default="*"
        ),
        sa.Column("max_size_mb", sa.Float(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["template_id"], ["dossier_template.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "template_id", "position", name="uq_dossier_template_item_position"
        ),
    )
    op.create_index(
        "ix_dossier_template_item_template_id", "dossier_template_item", ["template_id"]
    )


def downgrade() -> None:
    op.drop_table("dossier_template_item")
    op.drop_table("dossier_template")
    op.drop_table("document_upload")
    op.drop_table("document_request")
    op.drop_table("dossier")
    op.drop_table("client")
