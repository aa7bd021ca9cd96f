import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

import database
from bookings import router as bookings_router
from users import router as users_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create indexes on startup without blocking the service on Mongo."""
    if database.db is None:
        logger.warning("Starting without a database connection")
    else:
        try:
            database.ensure_indexes()
        except PyMongoError:
            logger.exception("Could not create indexes, starting anyway")
    yield


app = FastAPI(title="Taxi Booking API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(bookings_router)


@app.exception_handler(database.DatabaseUnavailable)
async def database_unavailable(request: Request, exc: database.DatabaseUnavailable):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/")
def read_root():
    return {"message": "Taxi Booking Backend is running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": None,
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": []
    }
    db = database.db
    if db is None:
        return response
    response["database_url"] = "✅ Set" if os.getenv("DATABASE_URL") else "❌ Not Set"
    response["database_name"] = "✅ Set" if os.getenv("DATABASE_NAME") else "❌ Not Set"
    try:
        response["collections"] = db.list_collection_names()[:10]
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        logger.exception("Database check failed")
        response["database"] = f"⚠️  Connected but Error: {str(e)[:80]}"
    return response


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
