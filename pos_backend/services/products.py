"""Product inventory CRUD."""

import logging

from sqlalchemy.orm import Session

from pos_backend.core.errors import ProductNotFound, SkuTaken
from pos_backend.models.product import Product
from pos_backend.repositories.products import ProductRepository
from pos_backend.schemas.product import ProductRequest

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: Session, repository: ProductRepository | None = None) -> None:
        self.session = session
        self.repository = repository or ProductRepository(session)

    def _get_or_raise(self, product_id: int) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            logger.warning("Product not found with ID: %s", product_id)
            raise ProductNotFound(f"Product not found with id: {product_id}")
        return product

    def create(self, data: ProductRequest) -> Product:
        if self.repository.get_by_sku(data.sku) is not None:
            raise SkuTaken(f"SKU is already in use: {data.sku}")
        product = Product(
            sku=data.sku,
            name=data.name,
            price=data.price,
            stock_quantity=data.stock_quantity,
        )
        self.repository.save(product)
        self.session.commit()
        logger.info(
            "Product created: %s (ID: %s, SKU: %s) - Price: %s, Stock: %s",
            product.name,
            product.id,
            product.sku,
            product.price,
            product.stock_quantity,
        )
        return product

    def get(self, product_id: int) -> Product:
        return self._get_or_raise(product_id)

    def get_by_sku(self, sku: str) -> Product:
        product = self.repository.get_by_sku(sku)
        if product is None:
            logger.warning("Product not found with SKU: %s", sku)
            raise ProductNotFound(f"Product not found with SKU: {sku}")
        return product

    def list_all(self) -> list[Product]:
        products = self.repository.list_all()
        logger.debug("Retrieved %s products from database", len(products))
        return products

    def update(self, product_id: int, data: ProductRequest) -> Product:
        product = self._get_or_raise(product_id)
        other = self.repository.get_by_sku(data.sku)
        if other is not None and other.id != product.id:
            raise SkuTaken(f"SKU is already in use: {data.sku}")

        old_name, old_sku = product.name, product.sku
        product.sku = data.sku
        product.name = data.name
        product.price = data.price
        product.stock_quantity = data.stock_quantity
        self.repository.save(product)
        self.session.commit()
        logger.info(
            "Product updated: ID %s - Name: %s -> %s, SKU: %s -> %s",
            product_id,
            old_name,
            product.name,
            old_sku,
            product.sku,
        )
        return product

    def delete(self, product_id: int) -> None:
        product = self._get_or_raise(product_id)
        self.repository.delete(product)
        self.session.commit()
        logger.info("Product deleted successfully: ID %s", product_id)
