"""
Pokemon API — Pokemon SQLAlchemy Model
========================================

What:  ORM model representing the `pokemon` table.
Who:   Used by SqlPokemonStore for queries and by Alembic for schema management.

Table Design:
    - id: Integer primary key generated by the engine (AUTO_INCREMENT, SERIAL,
      ROWID depending on the backend)
    - name: Unique alternate identifier; the unique constraint is the only
      guard against duplicates (the API performs no pre-check)
    - types: Comma-separated free text such as "Fire, Flying"
    - description: Free text
    - image: Opaque image reference (usually a URL), not validated
"""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pokemon_api.database import Base


class Pokemon(Base):
    """
    A Pokemon record.

    Lifecycle:
        1. Created by POST /pokemon (id assigned by the database)
        2. Partially updated by PATCH on either identifier axis
        3. Removed by DELETE on either identifier axis (hard delete)
    """

    __tablename__ = "pokemon"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique identifier generated by the database",
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Unique Pokemon name, usable as an alternate identifier",
    )

    types: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Comma-separated list of types",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text description",
    )

    image: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Image reference, usually a URL",
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_pokemon_name"),
    )

    def __repr__(self) -> str:
        return f"<Pokemon(id={self.id}, name='{self.name}')>"
