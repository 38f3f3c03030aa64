from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.health import router as health_router
from app.api.routes_catalogue import router as catalogue_router
from app.api.routes_seed import router as seed_router
from app.config import Settings, settings as default_settings
from app.db import Database
from app.logging_config import configure_logging
from app.services.bootstrap import bootstrap
from app.services.seed_service import SeedService


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    seed_service: Optional[SeedService] = None,
) -> FastAPI:
    """
    Build the application around an explicit Database and SeedService.

    Anything not passed in is built from `settings`. Tests inject a temporary
    database and a seed service wired to fake upstream transports.
    """
    settings = settings or default_settings
    database = database or Database(settings.DATABASE_URL)
    seed_service = seed_service or SeedService(database, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup
        configure_logging(settings.LOG_LEVEL)
        database.ensure_schema()
        if settings.SEED_ON_STARTUP:
            await bootstrap(database, seed_service, user_count=settings.SEED_USER_COUNT)
        else:
            logger.info("SEED_ON_STARTUP disabled, skipping bootstrap")

        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title="Product & User Seed Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.seed_service = seed_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, tags=["health"])

    app.include_router(catalogue_router, prefix="/products", tags=["catalogue"])

    app.include_router(seed_router, tags=["seed"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.APP_HOST, port=default_settings.APP_PORT)
