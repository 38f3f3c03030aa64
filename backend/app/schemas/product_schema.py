# backend/app/schemas/product_schema.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from pydantic import ConfigDict

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str
    description: Optional[str] = None
    price: float
    image: Optional[str] = None
    category: Optional[str] = None
    rating_rate: Optional[float] = None
    rating_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
