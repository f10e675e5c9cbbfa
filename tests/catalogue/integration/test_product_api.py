"""Integration tests for the Products API."""

from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product

NEW_PRODUCT = {
    "name": "Tomatoes",
    "description": "Vine ripened",
    "price": 40.0,
    "quantity": 120,
    "unit": "kg",
    "category": "vegetables",
    "images": ["https://img.test/t.jpg"],
}


class TestCreateProductEndpoint:
    def test_farmer_creates_product(self, client, farmer, auth_headers):
        response = client.post("/products", json=NEW_PRODUCT, headers=auth_headers(farmer))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Product created successfully"
        product = data["product"]
        assert product["farmerId"] == str(farmer.id)
        assert product["isAvailable"] is True
        assert product["farmer"]["farmName"] == "Green Acres"
        assert current_domain.repository_for(Product).get(product["id"]).quantity == 120

    def test_consumer_is_refused(self, client, consumer, auth_headers):
        response = client.post("/products", json=NEW_PRODUCT, headers=auth_headers(consumer))
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Farmer role required."

    def test_anonymous_is_refused(self, client):
        response = client.post("/products", json=NEW_PRODUCT)
        assert response.status_code == 401

    def test_missing_fields_are_a_400(self, client, farmer, auth_headers):
        response = client.post("/products", json={"name": "Tomatoes"}, headers=auth_headers(farmer))
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_unknown_unit_is_a_400(self, client, farmer, auth_headers):
        response = client.post("/products", json={**NEW_PRODUCT, "unit": "bushel"}, headers=auth_headers(farmer))
        assert response.status_code == 400


class TestReadEndpoints:
    def test_list_is_public(self, client, farmer, list_product):
        list_product(farmer, name="Okra")
        list_product(farmer, name="Garlic")

        response = client.get("/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Garlic", "Okra"]
        assert response.json()[0]["farmer"]["email"] == "asha@greenacres.test"

    def test_get_one(self, client, farmer, list_product):
        product_id = list_product(farmer)
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json()["id"] == product_id

    def test_get_missing(self, client):
        response = client.get("/products/missing-id")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_farmer_products(self, client, farmer, other_farmer, list_product, auth_headers):
        list_product(farmer, name="Okra")
        list_product(other_farmer, name="Onions")

        response = client.get("/products/farmer/products", headers=auth_headers(farmer))

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Okra"]


class TestUpdateProductEndpoint:
    def test_sparse_update(self, client, farmer, list_product, auth_headers):
        product_id = list_product(farmer, price=40.0, quantity=10)

        response = client.put(
            f"/products/{product_id}",
            json={"quantity": 0, "isAvailable": False},
            headers=auth_headers(farmer),
        )

        assert response.status_code == 200
        product = response.json()["product"]
        assert product["quantity"] == 0
        assert product["isAvailable"] is False
        assert product["price"] == 40.0

    def test_explicit_null_is_ignored(self, client, farmer, list_product, auth_headers):
        product_id = list_product(farmer, price=40.0)
        response = client.put(f"/products/{product_id}", json={"price": None}, headers=auth_headers(farmer))
        assert response.status_code == 200
        assert response.json()["product"]["price"] == 40.0

    def test_non_owner_is_refused(self, client, farmer, other_farmer, list_product, auth_headers):
        product_id = list_product(farmer)
        response = client.put(f"/products/{product_id}", json={"price": 1.0}, headers=auth_headers(other_farmer))
        assert response.status_code == 403
        assert response.json()["message"] == "Unauthorized: Product does not belong to this farmer"

    def test_missing_product(self, client, farmer, auth_headers):
        response = client.put("/products/missing-id", json={"price": 1.0}, headers=auth_headers(farmer))
        assert response.status_code == 404


class TestDeleteProductEndpoint:
    def test_owner_deletes(self, client, farmer, list_product, auth_headers):
        product_id = list_product(farmer)

        response = client.delete(f"/products/{product_id}", headers=auth_headers(farmer))

        assert response.status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_non_owner_is_refused(self, client, farmer, other_farmer, list_product, auth_headers):
        product_id = list_product(farmer)
        response = client.delete(f"/products/{product_id}", headers=auth_headers(other_farmer))
        assert response.status_code == 403
        assert client.get(f"/products/{product_id}").status_code == 200
