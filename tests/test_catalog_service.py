import io
from decimal import Decimal

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from conftest import make_product, principal
from restaurant_api.core.errors import InvalidFormat, NotFound, Unauthorized
from restaurant_api.models.products import Product, ProductCategory
from restaurant_api.schemas.product import ProductCreate, ProductUpdate
from restaurant_api.services import catalog


def new_product(**overrides):
    data = {
        "name": "Carbonara",
        "price": "32.90",
        "description": "Spaghetti, egg, guanciale",
        "category": "food",
    }
    data.update(overrides)
    return ProductCreate(**data)


def png(content=b"png") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename="dish.png", headers=Headers({"content-type": "image/png"}))


class TestCreateProduct:
    def test_create(self, db, pasta_house):
        product = catalog.create_product(db, principal(pasta_house), pasta_house.id, new_product())

        assert product.id is not None
        assert product.price == Decimal("32.90")
        assert product.category == ProductCategory.FOOD.value
        assert product.is_active is True
        assert product.photo_url is None

    def test_create_with_photo(self, db, pasta_house):
        product = catalog.create_product(db, principal(pasta_house), pasta_house.id, new_product(), png())

        assert product.photo_url.endswith(".png")

    def test_only_owner_creates(self, db, pasta_house, burger_joint):
        with pytest.raises(Unauthorized):
            catalog.create_product(db, principal(burger_joint), pasta_house.id, new_product())

        assert db.query(Product).count() == 0


class TestUpdateProduct:
    def test_partial_update_keeps_other_fields(self, db, pasta_house):
        product = make_product(db, pasta_house, price="10.00")
        patch = ProductUpdate.model_validate({"price": "12.50"})

        updated = catalog.update_product(db, principal(pasta_house), pasta_house.id, product.id, patch)

        assert updated.price == Decimal("12.50")
        assert updated.name == "Lasagna"
        assert updated.description == "House lasagna"

    def test_photo_kept_without_new_upload(self, db, pasta_house):
        product = make_product(db, pasta_house)
        product.photo_url = "existing.png"
        db.commit()

        updated = catalog.update_product(
            db, principal(pasta_house), pasta_house.id, product.id, ProductUpdate(name="Big lasagna")
        )

        assert updated.photo_url == "existing.png"
        assert updated.name == "Big lasagna"

    def test_new_photo_replaces_old(self, db, pasta_house):
        product = make_product(db, pasta_house)
        product.photo_url = "existing.png"
        db.commit()

        updated = catalog.update_product(
            db, principal(pasta_house), pasta_house.id, product.id, ProductUpdate(), png()
        )

        assert updated.photo_url != "existing.png"

    def test_invalid_photo_rejected_before_update(self, db, pasta_house):
        product = make_product(db, pasta_house)
        gif = UploadFile(file=io.BytesIO(b"gif"), filename="a.gif", headers=Headers({"content-type": "image/gif"}))

        with pytest.raises(InvalidFormat):
            catalog.update_product(
                db, principal(pasta_house), pasta_house.id, product.id, ProductUpdate(name="Renamed"), gif
            )

        db.expire_all()
        assert db.get(Product, product.id).name == "Lasagna"

    def test_inactive_product_not_found(self, db, pasta_house):
        product = make_product(db, pasta_house, is_active=False)

        with pytest.raises(NotFound):
            catalog.update_product(db, principal(pasta_house), pasta_house.id, product.id, ProductUpdate(name="Back"))

    def test_other_enterprise_unauthorized(self, db, pasta_house, burger_joint):
        product = make_product(db, pasta_house)

        with pytest.raises(Unauthorized):
            catalog.update_product(db, principal(burger_joint), pasta_house.id, product.id, ProductUpdate(name="Mine"))


class TestSoftDelete:
    def test_soft_delete_hides_product(self, db, pasta_house):
        product = make_product(db, pasta_house)

        catalog.soft_delete(db, principal(pasta_house), pasta_house.id, product.id)

        db.expire_all()
        assert db.get(Product, product.id).is_active is False
        assert catalog.list_active_by_enterprise(db, pasta_house.id) == []

        with pytest.raises(NotFound):
            catalog.get_active_by_id(db, principal(pasta_house), pasta_house.id, product.id)

    def test_unknown_product(self, db, pasta_house):
        with pytest.raises(NotFound):
            catalog.soft_delete(db, principal(pasta_house), pasta_house.id, 12345)


class TestListing:
    def test_only_active_products_of_the_enterprise_in_id_order(self, db, pasta_house, burger_joint):
        first = make_product(db, pasta_house, name="Gnocchi")
        make_product(db, pasta_house, name="Retired", is_active=False)
        third = make_product(db, pasta_house, name="Tiramisu")
        make_product(db, burger_joint, name="Burger")

        products = catalog.list_active_by_enterprise(db, pasta_house.id)

        assert [product.id for product in products] == [first.id, third.id]

    def test_get_active_by_id_requires_owner(self, db, pasta_house, burger_joint):
        product = make_product(db, pasta_house)

        with pytest.raises(Unauthorized):
            catalog.get_active_by_id(db, principal(burger_joint), pasta_house.id, product.id)

        assert catalog.get_active_by_id(db, principal(pasta_house), pasta_house.id, product.id).id == product.id
