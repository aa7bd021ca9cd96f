import logging
from datetime import datetime, timezone

from bson import ObjectId
from fastapi import APIRouter, HTTPException

from database import create_document, find_document, get_documents
from schemas import Booking
from users import public_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def _object_id(value: str, field: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {field} id")
    return ObjectId(value)


def _utc(value):
    # Mongo keeps instants in UTC
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _users_by_id(bookings) -> dict:
    """Fetch every referenced rider and driver in one query."""
    ids = {d[key] for d in bookings for key in ("rider", "driver") if d.get(key) is not None}
    if not ids:
        return {}
    return {u["_id"]: public_user(u) for u in get_documents("user", {"_id": {"$in": list(ids)}})}


def _serialize(doc, users=None) -> dict:
    out = {
        "id": str(doc["_id"]),
        "pickup_location": doc.get("pickup_location"),
        "dropoff_location": doc.get("dropoff_location"),
        "date": _utc(doc.get("date")),
        "status": doc.get("status"),
        "created_at": _utc(doc.get("created_at")),
    }
    if users is None:
        out["rider"] = str(doc["rider"])
        out["driver"] = str(doc["driver"])
    else:
        out["rider"] = users.get(doc.get("rider"))
        out["driver"] = users.get(doc.get("driver"))
    return out


@router.post("", status_code=201)
def create_booking(booking: Booking):
    doc = booking.model_dump()
    doc["rider"] = _object_id(booking.rider, "rider")
    doc["driver"] = _object_id(booking.driver, "driver")
    booking_id = create_document("booking", doc)
    logger.info("Created booking %s", booking_id)
    return _serialize(find_document("booking", {"_id": ObjectId(booking_id)}))


@router.get("")
def list_bookings():
    bookings = get_documents("booking")
    users = _users_by_id(bookings)
    return [_serialize(d, users) for d in bookings]
