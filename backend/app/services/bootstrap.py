from typing import Dict

from loguru import logger

from app.db import Database
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.services.seed_service import SeedResult, SeedService


async def bootstrap(database: Database, seed_service: SeedService, user_count: int = 5) -> Dict[str, SeedResult]:
    """
    First-run population: seed each table only if it is currently empty.

    The product and user checks are independent; a failed product seed does
    not prevent the user check. Returns the results of the seeds that ran,
    keyed by "products" / "users".
    """
    results = {}

    db = database.session()
    try:
        products_empty = ProductRepository(db).count() == 0
    finally:
        db.close()

    if products_empty:
        logger.info("Products table empty, fetching catalogue")
        results["products"] = await seed_service.fetch_all_products()
    else:
        logger.info("Products already present, skipping catalogue seed")

    db = database.session()
    try:
        users_empty = UserRepository(db).count() == 0
    finally:
        db.close()

    if users_empty:
        logger.info("Users table empty, generating {} users", user_count)
        results["users"] = await seed_service.fetch_random_users(user_count)
    else:
        logger.info("Users already present, skipping user seed")

    return results
