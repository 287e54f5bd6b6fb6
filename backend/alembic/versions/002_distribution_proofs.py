"""Add distribution_proofs table for hand-out evidence on requests.

Revision ID: 002_distribution_proofs
Revises: 001_initial
Create Date: 2026-10-19

One request can carry several proofs (photo reference, description,
number of people served).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_distribution_proofs"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "distribution_proofs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("request_id", UUID(as_uuid=True), sa.ForeignKey("requests.id"), nullable=False),
        sa.Column("photo_url", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("distributed_to_count", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_distribution_proofs_request_id", "distribution_proofs", ["request_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_distribution_proofs_request_id", table_name="distribution_proofs")
    op.drop_table("distribution_proofs")
