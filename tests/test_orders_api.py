"""Order endpoints: placing, listing and moving orders through their statuses."""

import uuid
from decimal import Decimal

import pytest

from conftest import auth_headers, make_product
from restaurant_api.models.order_products import OrderProduct
from restaurant_api.models.orders import Order


def place(client, user, enterprise, *pairs):
    return client.post(
        "/orders",
        json={
            "enterprise_id": str(enterprise.id),
            "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in pairs],
        },
        headers=auth_headers(user),
    )


class TestPlaceOrder:
    def test_scenario_append_to_open_order(self, client, db, alice, pasta_house):
        lasagna = make_product(db, pasta_house, name="Lasagna", price="10.00")
        soda = make_product(db, pasta_house, name="Soda", price="5.00")

        first = place(client, alice, pasta_house, (lasagna.id, 2))

        assert first.status_code == 200
        first_data = first.json()
        assert Decimal(first_data["total"]) == Decimal("20.00")
        assert first_data["status"] == "created"
        assert first_data["client"] == "Alice"
        assert len(first_data["items"]) == 1
        assert first_data["items"][0]["name"] == "Lasagna"
        assert Decimal(first_data["items"][0]["price"]) == Decimal("10.00")

        second = place(client, alice, pasta_house, (soda.id, 1))

        second_data = second.json()
        assert second_data["id"] == first_data["id"]
        assert Decimal(second_data["total"]) == Decimal("25.00")
        assert [item["name"] for item in second_data["items"]] == ["Lasagna", "Soda"]

    def test_total_equals_sum_of_lines(self, client, db, alice, pasta_house):
        salad = make_product(db, pasta_house, name="Salad", price="7.35")
        juice = make_product(db, pasta_house, name="Juice", price="3.10")

        place(client, alice, pasta_house, (salad.id, 3))
        data = place(client, alice, pasta_house, (juice.id, 2), (salad.id, 1)).json()

        lines = sum(Decimal(item["line_total"]) for item in data["items"])
        assert Decimal(data["total"]) == lines == Decimal("35.60")

    def test_atomic_on_unknown_product(self, client, db, alice, pasta_house):
        lasagna = make_product(db, pasta_house, price="10.00")

        response = place(client, alice, pasta_house, (lasagna.id, 1), (424242, 1))

        assert response.status_code == 404
        assert response.json()["detail"] == "product 424242"
        db.expire_all()
        assert db.query(Order).count() == 0
        assert db.query(OrderProduct).count() == 0

    def test_failed_append_keeps_previous_total(self, client, db, alice, pasta_house):
        lasagna = make_product(db, pasta_house, price="10.00")
        order_id = place(client, alice, pasta_house, (lasagna.id, 2)).json()["id"]

        place(client, alice, pasta_house, (lasagna.id, 1), (424242, 1))

        db.expire_all()
        order = db.get(Order, uuid.UUID(order_id))
        assert order.total == Decimal("20.00")
        assert db.query(OrderProduct).count() == 1

    def test_empty_items(self, client, alice, pasta_house):
        response = place(client, alice, pasta_house)

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity(self, client, db, alice, pasta_house, quantity):
        lasagna = make_product(db, pasta_house)

        response = place(client, alice, pasta_house, (lasagna.id, quantity))

        assert response.status_code == 422

    def test_quantity_above_maximum(self, client, db, alice, pasta_house):
        lasagna = make_product(db, pasta_house)

        response = place(client, alice, pasta_house, (lasagna.id, 10**20))

        assert response.status_code == 422
        db.expire_all()
        assert db.query(Order).count() == 0

    def test_total_too_large(self, client, db, alice, pasta_house):
        yacht = make_product(db, pasta_house, name="Yacht", price="99999999.99")

        response = place(client, alice, pasta_house, (yacht.id, 5))

        assert response.status_code == 400
        assert response.json() == {"detail": "Order total too large", "kind": "validation"}
        db.expire_all()
        assert db.query(Order).count() == 0

    def test_enterprise_cannot_place_orders(self, client, db, pasta_house):
        lasagna = make_product(db, pasta_house)

        response = place(client, pasta_house, pasta_house, (lasagna.id, 1))

        assert response.status_code == 401

    def test_requires_token(self, client, pasta_house):
        response = client.post("/orders", json={"enterprise_id": str(pasta_house.id), "items": []})

        assert response.status_code == 401


class TestListOrders:
    @pytest.fixture()
    def orders(self, client, db, alice, pasta_house, burger_joint):
        lasagna = make_product(db, pasta_house, price="10.00")
        burger = make_product(db, burger_joint, name="Burger", price="8.00")
        place(client, alice, pasta_house, (lasagna.id, 1))
        place(client, alice, burger_joint, (burger.id, 2))

    def test_client_lists_own_orders(self, client, alice, orders):
        response = client.get(f"/orders/{alice.id}", headers=auth_headers(alice))

        assert response.status_code == 200
        data = response.json()
        assert len(data["orders"]) == 2
        assert data["pagination"] == {"current_page": 1, "limit": 10, "total_pages": 1}

    def test_client_cannot_list_someone_else(self, client, alice, bob, orders):
        response = client.get(f"/orders/{alice.id}", headers=auth_headers(bob))

        assert response.status_code == 401

    def test_enterprise_sees_only_its_share_of_a_client(self, client, alice, pasta_house, orders):
        response = client.get(f"/orders/{alice.id}", headers=auth_headers(pasta_house))

        assert response.status_code == 200
        data = response.json()
        assert [order["enterprise_id"] for order in data["orders"]] == [str(pasta_house.id)]
        assert "total_pages" not in data["pagination"]

    def test_limit_reached(self, client, alice, orders):
        response = client.get(f"/orders/{alice.id}", params={"limit": 1000}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert "Limit reached" in response.json()["detail"]

    @pytest.mark.parametrize("params", [{"page": "abc"}, {"limit": "1.5"}, {"page": "0"}])
    def test_malformed_paging_is_a_validation_error(self, client, alice, burger_joint, orders, params):
        for path, user in [(f"/orders/{alice.id}", alice), (f"/orders/enterprise/{burger_joint.id}", burger_joint)]:
            response = client.get(path, params=params, headers=auth_headers(user))

            assert response.status_code == 400
            assert response.json()["kind"] == "validation"

    def test_paging_values_are_coerced(self, client, alice, orders):
        response = client.get(f"/orders/{alice.id}", params={"page": "2", "limit": "1"}, headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json()["pagination"] == {"current_page": 2, "limit": 1, "total_pages": 2}
        assert len(response.json()["orders"]) == 1

    def test_enterprise_lists_its_orders(self, client, burger_joint, orders):
        response = client.get(f"/orders/enterprise/{burger_joint.id}", headers=auth_headers(burger_joint))

        assert response.status_code == 200
        data = response.json()
        assert len(data["orders"]) == 1
        assert Decimal(data["orders"][0]["total"]) == Decimal("16.00")
        assert data["pagination"]["total_pages"] == 1

    def test_enterprise_cannot_list_another_enterprise(self, client, pasta_house, burger_joint, orders):
        response = client.get(f"/orders/enterprise/{burger_joint.id}", headers=auth_headers(pasta_house))

        assert response.status_code == 401

    def test_client_cannot_use_enterprise_listing(self, client, alice, pasta_house, orders):
        response = client.get(f"/orders/enterprise/{pasta_house.id}", headers=auth_headers(alice))

        assert response.status_code == 401


class TestUpdateOrderStatus:
    @pytest.fixture()
    def order_id(self, client, db, alice, pasta_house):
        lasagna = make_product(db, pasta_house, price="10.00")
        return place(client, alice, pasta_house, (lasagna.id, 1)).json()["id"]

    def patch(self, client, enterprise, order_id, status, caller=None):
        return client.patch(
            f"/orders/{enterprise.id}/{order_id}",
            json={"status": status},
            headers=auth_headers(caller or enterprise),
        )

    def test_lifecycle(self, client, pasta_house, order_id):
        preparing = self.patch(client, pasta_house, order_id, "preparing")
        assert preparing.status_code == 200
        assert preparing.json()["status"] == "preparing"

        closed = self.patch(client, pasta_house, order_id, "closed")
        assert closed.status_code == 200
        assert closed.json()["status"] == "closed"

    def test_created_rejected(self, client, pasta_house, order_id):
        response = self.patch(client, pasta_house, order_id, "created")

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_transition"

    def test_same_status_rejected(self, client, pasta_house, order_id):
        self.patch(client, pasta_house, order_id, "preparing")

        response = self.patch(client, pasta_house, order_id, "preparing")

        assert response.status_code == 400
        assert response.json()["detail"] == "The status is already this"

    def test_closed_is_terminal(self, client, pasta_house, order_id):
        self.patch(client, pasta_house, order_id, "closed")

        response = self.patch(client, pasta_house, order_id, "preparing")

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_transition"

    def test_unknown_order(self, client, pasta_house):
        response = self.patch(client, pasta_house, uuid.uuid4(), "preparing")

        assert response.status_code == 404

    def test_not_the_owner(self, client, pasta_house, burger_joint, order_id):
        response = self.patch(client, pasta_house, order_id, "preparing", caller=burger_joint)

        assert response.status_code == 401

    def test_unknown_status_value(self, client, pasta_house, order_id):
        response = self.patch(client, pasta_house, order_id, "cancelled")

        assert response.status_code == 422

    def test_new_order_after_close(self, client, db, alice, pasta_house, order_id):
        self.patch(client, pasta_house, order_id, "closed")
        lasagna_id = db.query(OrderProduct).first().product_id

        response = place(client, alice, pasta_house, (lasagna_id, 1))

        assert response.json()["id"] != order_id
        assert Decimal(response.json()["total"]) == Decimal("10.00")
