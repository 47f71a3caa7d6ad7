"""Athlete ORM — registry row the ranking engine snapshots at update time.

Invariants:
    - gender and age_category hold Gender / AgeCategory values
    - Owned by the athlete registry; the ranking engine only reads it
"""

from datetime import date

from sqlalchemy import String, Date
from sqlalchemy.orm import Mapped, mapped_column

from rankings.db.base import Base


class Athlete(Base):
    __tablename__ = "athletes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    surname: Mapped[str] = mapped_column(String(200), nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    age_category: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str | None] = mapped_column(String(3), nullable=True)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
