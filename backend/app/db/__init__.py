from typing import Iterator

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one database file.

    Built explicitly (see app.main.create_app) and handed to whoever needs it;
    route handlers reach it through get_db.
    """

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # sessions are opened from FastAPI's threadpool
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine = create_engine(url, future=True, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def ensure_schema(self) -> None:
        """Create the users and products tables if they do not exist yet."""
        # populate Base.metadata
        from app.models import product, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database & tables ready ({})", self.url)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: {}", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
