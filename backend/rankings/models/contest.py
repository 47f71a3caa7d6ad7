"""Contest ORM — competition metadata, identified per discipline.

Invariants:
    - Primary key is (id, discipline): contest ids are discipline-scoped
    - contest_type holds a ContestType value
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from rankings.db.base import Base


class Contest(Base):
    __tablename__ = "contests"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    discipline: Mapped[str] = mapped_column(String(40), primary_key=True)
    contest_type: Mapped[str] = mapped_column(String(40), nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    name: Mapped[str | None] = mapped_column(String(300), nullable=True)
