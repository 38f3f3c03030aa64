from dataclasses import dataclass
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.adapters.fake_store import FakeStoreClient
from app.adapters.random_user import RandomUserClient, UpstreamFetchError
from app.config import Settings, settings as default_settings
from app.db import Database
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository


@dataclass
class SeedResult:
    """Outcome of one seeding run. `error` is None when every row was stored."""

    ok: bool
    inserted: int = 0
    failed: int = 0
    error: Optional[str] = None


class SeedService:
    """
    Pulls seed data from the upstream APIs and writes it through the repositories.

    Neither operation raises: failures are logged and reported in the SeedResult,
    and callers decide whether to surface them.
    """

    def __init__(
        self,
        database: Database,
        user_client: Optional[RandomUserClient] = None,
        product_client: Optional[FakeStoreClient] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or default_settings
        self.database = database
        self.users = user_client or RandomUserClient(settings.RANDOM_USER_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
        self.products = product_client or FakeStoreClient(settings.PRODUCTS_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)

    async def fetch_random_users(self, n: int = 5) -> SeedResult:
        try:
            users = await self.users.fetch(n)
        except UpstreamFetchError as e:
            logger.error("Error inserting users: {}", e)
            return SeedResult(ok=False, error=str(e))

        inserted = 0
        errors = []
        db = self.database.session()
        try:
            repo = UserRepository(db)
            for u in users:
                try:
                    repo.create(**u)
                    inserted += 1
                except IntegrityError as e:
                    logger.warning("Skipping user {!r}: {}", u["username"], e.orig)
                    errors.append(f"{u['username']}: {e.orig}")
                except SQLAlchemyError as e:
                    logger.error("Error inserting user {!r}: {}", u["username"], e)
                    errors.append(f"{u['username']}: {e}")
        finally:
            db.close()

        logger.info("Inserted {} random users ({} failed)", inserted, len(errors))
        return SeedResult(
            ok=not errors,
            inserted=inserted,
            failed=len(errors),
            error="; ".join(errors) or None,
        )

    async def fetch_all_products(self) -> SeedResult:
        try:
            products = await self.products.fetch()
        except UpstreamFetchError as e:
            logger.error("Error fetching products: {}", e)
            return SeedResult(ok=False, error=str(e))

        inserted = 0
        db = self.database.session()
        try:
            repo = ProductRepository(db)
            for p in products:
                repo.create(**p)
                inserted += 1
        except SQLAlchemyError as e:
            # rows already committed stay in place
            logger.error("Error inserting products after {} rows: {}", inserted, e)
            return SeedResult(ok=False, inserted=inserted, failed=len(products) - inserted, error=str(e))
        finally:
            db.close()

        logger.info("Inserted {} products", inserted)
        return SeedResult(ok=True, inserted=inserted)
