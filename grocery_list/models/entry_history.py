"""Entry history model for name suggestions."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String

from grocery_list.database import Base


class EntryHistory(Base):
    """Every name ever put on the list, kept after the entry itself is gone."""

    __tablename__ = "entry_history"

    id = Column(Integer, primary_key=True, index=True)
    normalized_name = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    occurrence_count = Column(Integer, nullable=False, default=1)
    last_used_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
