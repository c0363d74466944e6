"""Product store."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pos_backend.core.errors import SkuTaken
from pos_backend.models.product import Product


class ProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, product_id: int) -> Product | None:
        return self.session.get(Product, product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        return self.session.scalars(select(Product).where(Product.sku == sku)).first()

    def list_all(self) -> list[Product]:
        return list(self.session.scalars(select(Product).order_by(Product.id)).all())

    def save(self, product: Product) -> Product:
        """Insert or flush pending changes; a duplicate SKU becomes SkuTaken."""
        self.session.add(product)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            if "sku" not in str(e.orig).lower():
                raise
            raise SkuTaken() from e
        return product

    def delete(self, product: Product) -> None:
        self.session.delete(product)
        self.session.flush()
