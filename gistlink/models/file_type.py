"""File type model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from gistlink.database import Base


class FileType(Base):
    """Kind of file a gist can hold, e.g. a shell script or a dotfile."""

    __tablename__ = "file_types"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    extension = Column(String(32), nullable=False, default="", server_default="")
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    category = relationship("Category", back_populates="file_types")
    files = relationship("File", back_populates="file_type")
