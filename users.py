import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, field_validator
from pymongo.errors import DuplicateKeyError

from database import create_document, find_document
from schemas import User
from security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


def public_user(doc):
    """User document without the password hash."""
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name"),
        "email": doc.get("email"),
        "role": doc.get("role"),
    }


def save_user(user: User) -> str:
    # Plaintext never reaches the collection
    hashed = user.model_copy(update={"password": hash_password(user.password)})
    return create_document("user", hashed)


@router.post("/register", status_code=201)
def register(user: User):
    if find_document("user", {"email": user.email}):
        raise HTTPException(status_code=400, detail="User already exists")
    try:
        user_id = save_user(user)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="User already exists")
    logger.info("Registered user %s", user_id)
    return {"message": "User registered successfully", "id": user_id}


@router.post("/login")
def login(req: LoginRequest):
    doc = find_document("user", {"email": req.email})
    if not doc or not verify_password(req.password, doc.get("password", "")):
        logger.info("Failed login for %s", req.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user_id = str(doc["_id"])
    return {"token": create_access_token(user_id), "user": public_user(doc)}
