"""SQLAlchemy ORM model for Points of Sale (campus cafés, bakeries, vending machines...).

  - Integer primary key, assigned by the database on insert
  - ``name`` carries a UNIQUE constraint; concurrent duplicate inserts are
    rejected by the database, not by the application
  - created_at / updated_at come from TimestampMixin
"""

from __future__ import annotations

from sqlalchemy import Enum, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_coffee.db.base import Base
from campus_coffee.domain.enums import CampusType, PosType
from campus_coffee.domain.mixins import TimestampMixin

POS_NAME_CONSTRAINT = "uq_pos_name"


class Pos(Base, TimestampMixin):
    __tablename__ = "pos"
    __table_args__ = (UniqueConstraint("name", name=POS_NAME_CONSTRAINT),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[PosType] = mapped_column(
        Enum(PosType, native_enum=False, length=32), nullable=False
    )
    campus: Mapped[CampusType] = mapped_column(
        Enum(CampusType, native_enum=False, length=32), nullable=False
    )

    # Address
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    house_number: Mapped[str] = mapped_column(String(50), nullable=False)
    postal_code: Mapped[int] = mapped_column(Integer, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Pos id={self.id} name={self.name!r}>"
