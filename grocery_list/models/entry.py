"""Entry model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from grocery_list.database import Base
from grocery_list.models.mixins import TimestampMixin


class Entry(Base, TimestampMixin):
    """A single grocery list item."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # "2 lbs", "1 gallon", etc.
    quantity = Column(String(50), nullable=False, default="", server_default="")
    notes = Column(String(2000), nullable=False, default="", server_default="")
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Position is scoped to the category; uncategorized entries share one scope
    position = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category", back_populates="entries")

    @property
    def completed(self) -> bool:
        return self.completed_at is not None
