from sqlalchemy import Column, DateTime, Float, Integer, String, Text, func

from app.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    image = Column(String(512), nullable=True)
    category = Column(String(255), nullable=True)
    rating_rate = Column(Float, nullable=True)
    rating_count = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} title={self.title}>"
