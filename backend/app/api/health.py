from app.db import Database, get_database
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

router = APIRouter()

GREETING = "Hello Ipssi v2 with SQLAlchemy!"


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def index():
    return GREETING


@router.get("/health", tags=["health"])
def health(database: Database = Depends(get_database)):
    db_ok = database.ping()
    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
