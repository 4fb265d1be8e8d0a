"""Category model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from grocery_list.database import Base
from grocery_list.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Named grouping of entries with an explicit display order."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # Entries go with their category (ON DELETE CASCADE in the schema)
    entries = relationship(
        "Entry", back_populates="category", cascade="all, delete-orphan", passive_deletes=True
    )
