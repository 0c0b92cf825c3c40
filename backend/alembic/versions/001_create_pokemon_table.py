"""Create pokemon table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `pokemon` table with a generated integer id and a unique
       constraint on `name`.
Rollback: downgrade() drops the table (all records are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pokemon",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Unique identifier generated by the database",
        ),
        sa.Column(
            "name",
            sa.String(100),
            nullable=False,
            comment="Unique Pokemon name, usable as an alternate identifier",
        ),
        sa.Column(
            "types",
            sa.String(255),
            nullable=False,
            comment="Comma-separated list of types",
        ),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            comment="Free-text description",
        ),
        sa.Column(
            "image",
            sa.String(500),
            nullable=False,
            comment="Image reference, usually a URL",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_pokemon_name"),
    )


def downgrade() -> None:
    op.drop_table("pokemon")
