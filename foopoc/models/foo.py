"""Foo ORM — the single mutable table of named records.

Invariants:
    - id is an integer primary key assigned by the store (serial, increasing)
    - name is non-nullable text
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from foopoc.db.base import Base


class Foo(Base):
    __tablename__ = "foos"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
