"""Category model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from gistlink.database import Base


class Category(Base):
    """Grouping for file types."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)

    file_types = relationship("FileType", back_populates="category")
