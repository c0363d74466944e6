"""ORM model for inventory products."""

from sqlalchemy import Column, Integer, Numeric, String

from pos_backend.models.base import Base


class Product(Base):
    """Product sold at the point of sale: SKU, name, price and units in stock."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sku = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(19, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
