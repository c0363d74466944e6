"""ProductService CRUD against an in-memory database."""

import unittest
from decimal import Decimal

from pydantic import ValidationError

from pos_backend.core.errors import ProductNotFound, SkuTaken
from pos_backend.schemas.product import ProductRequest
from pos_backend.services.products import ProductService
from support import make_session_factory


def _request(sku: str = "SKU-001", name: str = "Espresso beans", **kwargs: object) -> ProductRequest:
    defaults = {"price": Decimal("12.50"), "stock_quantity": 10}
    defaults.update(kwargs)
    return ProductRequest(sku=sku, name=name, **defaults)


class ProductServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.service = ProductService(self.session)

    def tearDown(self) -> None:
        self.session.close()


class TestCreateAndRead(ProductServiceTestCase):
    def test_create_then_lookup_by_id_and_sku(self) -> None:
        created = self.service.create(_request())
        self.assertIsNotNone(created.id)
        self.assertEqual(self.service.get(created.id).name, "Espresso beans")
        self.assertEqual(self.service.get_by_sku("SKU-001").id, created.id)
        self.assertEqual(Decimal(self.service.get(created.id).price), Decimal("12.50"))

    def test_duplicate_sku(self) -> None:
        self.service.create(_request())
        with self.assertRaises(SkuTaken):
            self.service.create(_request(name="Other"))

    def test_list_ordered_by_id(self) -> None:
        self.service.create(_request("B"))
        self.service.create(_request("A"))
        self.assertEqual([p.sku for p in self.service.list_all()], ["B", "A"])

    def test_missing_product(self) -> None:
        with self.assertRaises(ProductNotFound):
            self.service.get(999)
        with self.assertRaises(ProductNotFound):
            self.service.get_by_sku("nope")


class TestUpdateAndDelete(ProductServiceTestCase):
    def test_update_replaces_fields(self) -> None:
        created = self.service.create(_request())
        updated = self.service.update(
            created.id, _request("SKU-002", "Decaf beans", price=Decimal("9.99"), stock_quantity=0)
        )
        self.assertEqual(updated.sku, "SKU-002")
        self.assertEqual(updated.stock_quantity, 0)
        with self.assertRaises(ProductNotFound):
            self.service.get_by_sku("SKU-001")

    def test_update_keeping_own_sku_is_allowed(self) -> None:
        created = self.service.create(_request())
        self.assertEqual(self.service.update(created.id, _request(name="Renamed")).name, "Renamed")

    def test_update_onto_another_sku(self) -> None:
        self.service.create(_request("SKU-001"))
        second = self.service.create(_request("SKU-002"))
        with self.assertRaises(SkuTaken):
            self.service.update(second.id, _request("SKU-001"))

    def test_update_missing(self) -> None:
        with self.assertRaises(ProductNotFound):
            self.service.update(42, _request())

    def test_delete(self) -> None:
        created = self.service.create(_request())
        self.service.delete(created.id)
        with self.assertRaises(ProductNotFound):
            self.service.get(created.id)
        with self.assertRaises(ProductNotFound):
            self.service.delete(created.id)


class TestProductRequestValidation(unittest.TestCase):
    def test_rejects_non_positive_price(self) -> None:
        with self.assertRaises(ValidationError):
            _request(price=Decimal("0"))

    def test_rejects_negative_stock(self) -> None:
        with self.assertRaises(ValidationError):
            _request(stock_quantity=-1)

    def test_rejects_blank_sku(self) -> None:
        with self.assertRaises(ValidationError):
            _request(sku="   ")


if __name__ == "__main__":
    unittest.main()
