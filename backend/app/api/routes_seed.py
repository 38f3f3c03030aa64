from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from app.services.seed_service import SeedService

router = APIRouter(tags=["seed"])


def get_seed_service(request: Request) -> SeedService:
    return request.app.state.seed_service


@router.get("/generate-users", summary="Fetch and store random users")
async def generate_users(request: Request, svc: SeedService = Depends(get_seed_service)):
    n = request.app.state.settings.SEED_USER_COUNT
    result = await svc.fetch_random_users(n)
    if not result.ok:
        logger.warning("User generation incomplete: {}", result)
    # response is the same whatever the outcome
    return {"success": True, "message": f"Generated {n} random users"}


@router.get("/generate-products", summary="Fetch and store the product catalogue", response_class=PlainTextResponse)
async def generate_products(svc: SeedService = Depends(get_seed_service)):
    result = await svc.fetch_all_products()
    if not result.ok:
        logger.warning("Product generation incomplete: {}", result)
    return "products generated"
