"""
Database access

Thin helpers around a pymongo database handle. Collections are named after
the lowercase schema class (User -> user, Booking -> booking).
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")


class DatabaseUnavailable(RuntimeError):
    """Raised when no database handle is configured."""


def _connect():
    if not DATABASE_URL or not DATABASE_NAME:
        logger.warning("DATABASE_URL or DATABASE_NAME not set, database disabled")
        return None
    client = MongoClient(DATABASE_URL, tz_aware=True)
    return client[DATABASE_NAME]


db = _connect()


def _require_db():
    if db is None:
        raise DatabaseUnavailable("Database not available")
    return db


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
    """Insert a document with timestamps and return its id as a string."""
    database = _require_db()
    if isinstance(data, BaseModel):
        doc = data.model_dump()
    else:
        doc = dict(data)
    now = datetime.now(timezone.utc)
    doc["created_at"] = now
    doc["updated_at"] = now
    result = database[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    database = _require_db()
    cursor = database[collection_name].find(filter_dict or {})
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def find_document(collection_name: str, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    database = _require_db()
    return database[collection_name].find_one(filter_dict)


def ensure_indexes() -> None:
    database = _require_db()
    database["user"].create_index([("email", ASCENDING)], unique=True)
