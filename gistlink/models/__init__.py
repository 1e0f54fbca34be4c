"""SQLAlchemy models."""

from gistlink.models.category import Category
from gistlink.models.file import File
from gistlink.models.file_type import FileType
from gistlink.models.user import User

__all__ = [
    "User",
    "Category",
    "FileType",
    "File",
]
