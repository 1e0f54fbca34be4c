"""User model."""

import uuid

from sqlalchemy import Column, Text, Uuid

from gistlink.database import Base
from gistlink.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    """Account linked to a gist."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    gist_id = Column(Text, unique=True, nullable=True)
    name = Column(Text, nullable=True)
    email = Column(Text, unique=True, nullable=False)
    username = Column(Text, unique=True, nullable=False)
    hashed_pwd = Column(Text, nullable=False)
