"""File model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from gistlink.database import Base


class File(Base):
    """Known file that can be generated into a gist."""

    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    file_type_id = Column(Integer, ForeignKey("file_types.id"), nullable=True, index=True)

    file_type = relationship("FileType", back_populates="files")
