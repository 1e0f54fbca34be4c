"""Read-only endpoints for the categories, file types and files tables."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gistlink.database import get_db
from gistlink.errors import StoreError
from gistlink.models.category import Category
from gistlink.models.file import File
from gistlink.models.file_type import FileType
from gistlink.schemas.lookup import CategoryResponse, FileResponse, FileTypeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lookups"])


def fetch_all(db: Session, model) -> list:
    """All rows of a lookup table ordered by id."""
    try:
        return db.query(model).order_by(model.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {model.__tablename__}: {e}")
        raise StoreError(f"Error fetching {model.__tablename__}") from e


@router.get("/categories", response_model=list[CategoryResponse])
def get_categories(db: Annotated[Session, Depends(get_db)]):
    return fetch_all(db, Category)


@router.get("/fileTypes", response_model=list[FileTypeResponse])
def get_file_types(db: Annotated[Session, Depends(get_db)]):
    return fetch_all(db, FileType)


@router.get("/files", response_model=list[FileResponse])
def get_files(db: Annotated[Session, Depends(get_db)]):
    return fetch_all(db, File)
