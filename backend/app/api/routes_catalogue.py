from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.db import get_db
from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductOut

router = APIRouter(tags=["catalogue"])

# ids outside a signed 64-bit INTEGER cannot exist as keys
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def _to_dict(p):
    return ProductOut.model_validate(p).model_dump(mode="json")


def _store_error(e: SQLAlchemyError):
    logger.error("Product query failed: {}", e)
    return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("", summary="List products")
def list_products(db: Session = Depends(get_db)):
    try:
        items = ProductRepository(db).find_all()
    except SQLAlchemyError as e:
        return _store_error(e)
    return [_to_dict(p) for p in items]


# must stay above /{product_id}
@router.get("/search", summary="Search products by title, description or category")
def search_products(
    q: Optional[str] = Query("", description="search term"),
    db: Session = Depends(get_db),
):
    logger.info("Search term: {!r}", q)
    try:
        items = ProductRepository(db).search(q)
    except SQLAlchemyError as e:
        return _store_error(e)
    return [_to_dict(p) for p in items]


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    # unknown or non-numeric ids answer {} rather than 404
    try:
        pk = int(product_id)
    except ValueError:
        return {}
    if not SQLITE_INT_MIN <= pk <= SQLITE_INT_MAX:
        return {}
    try:
        p = ProductRepository(db).find_by_id(pk)
    except SQLAlchemyError as e:
        return _store_error(e)
    return _to_dict(p) if p else {}
