"""create shipment record

Revision ID: 3e9a1c7d2b40
Revises:
Create Date: 2026-10-17 10:12:31.402911

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e9a1c7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "shipment_record",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("plant", sa.String(length=255), nullable=False),
        sa.Column("mill", sa.String(length=255), nullable=False),
        sa.Column("date", sa.String(length=32), nullable=False),
        sa.Column("day_of_week", sa.String(length=16), nullable=False),
        sa.Column("truck_number", sa.String(length=255), nullable=False),
        sa.Column("sku", sa.String(length=255), nullable=False),
        sa.Column("number_of_rolls", sa.Integer(), nullable=False),
        sa.Column("tons", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_shipment_record_status",
        ),
        sa.CheckConstraint("number_of_rolls >= 0", name="ck_shipment_record_rolls"),
        sa.CheckConstraint("tons >= 0", name="ck_shipment_record_tons"),
    )
    op.create_index("ix_shipment_record_truck_number", "shipment_record", ["truck_number"])
    op.create_index("ix_shipment_record_status", "shipment_record", ["status"])


def downgrade() -> None:
    op.drop_index("ix_shipment_record_status", table_name="shipment_record")
    op.drop_index("ix_shipment_record_truck_number", table_name="shipment_record")
    op.drop_table("shipment_record")
