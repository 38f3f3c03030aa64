from typing import List, Optional

from app.models.product import Product
from sqlalchemy import func, or_
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def find_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def search(self, term: Optional[str]) -> List[Product]:
        """
        Products whose title, description or category contains `term`.

        Matching is SQL LIKE, so case sensitivity follows the backend
        (ASCII case-insensitive on SQLite). An empty term matches every
        row that has at least one of the three columns set. `%` and `_`
        in the term are not escaped and act as LIKE wildcards.
        """
        like = f"%{term or ''}%"
        return (
            self.db.query(Product)
            .filter(
                or_(
                    Product.title.like(like),
                    Product.description.like(like),
                    Product.category.like(like),
                )
            )
            .order_by(Product.id)
            .all()
        )

    def create(
        self,
        title: str,
        price: float,
        description: str = None,
        image: str = None,
        category: str = None,
        rating_rate: float = None,
        rating_count: int = None,
    ) -> Product:
        p = Product(
            title=title,
            price=price,
            description=description,
            image=image,
            category=category,
            rating_rate=rating_rate,
            rating_count=rating_count,
        )
        self.db.add(p)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(p)
        return p
