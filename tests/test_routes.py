import pytest


@pytest.fixture
def beverages(client, headers):
    response = client.post("/api/v1/category", json={"name": "Beverages"}, headers=headers())
    assert response.status_code == 201
    return response.get_json()["message"]


def product_body(category_id, **overrides):
    body = {"name": "Cola", "categoryid": category_id, "price": 150, "quantity": 24, "description": "50cl"}
    body.update(overrides)
    return body


def test_health(client):
    assert client.get("/health").get_json() == {"status": True, "message": "ok"}


def test_pages_render(client):
    assert client.get("/").status_code == 200
    assert b"login-form" in client.get("/").data
    assert client.get("/category-settings.html").status_code == 200
    assert client.get("/secret.html").status_code == 404


def test_unknown_api_route(client):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.get_json()["status"] is False


# ---------------- PRODUCTS ----------------
def test_empty_product_listing(client, headers):
    response = client.get("/api/v1/products", headers=headers())
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] is True
    assert body["message"]["rows"] == []
    assert body["message"]["message"] == "You have not created products yet."


def test_product_crud(client, headers, beverages):
    created = client.post("/api/v1/products", json=product_body(beverages["category_id"]), headers=headers())
    assert created.status_code == 201
    product = created.get_json()["message"]
    assert product["product_name"] == "Cola"
    assert product["category_name"] == "Beverages"

    url = f"/api/v1/products/{product['product_id']}"
    assert client.get(url, headers=headers("Attendant")).get_json()["message"] == product

    updated = client.put(url, json={"quantity": 3}, headers=headers())
    assert updated.status_code == 200
    assert updated.get_json()["message"]["quantity"] == 3

    deleted = client.delete(url, headers=headers())
    assert deleted.get_json() == {"status": True, "message": []}

    missing = client.get(url, headers=headers())
    assert missing.status_code == 404
    assert missing.get_json() == {"status": False, "message": "Product not found"}


def test_create_product_in_missing_category(client, headers):
    response = client.post("/api/v1/products", json=product_body(99), headers=headers())
    assert response.status_code == 400
    assert response.get_json() == {"status": False, "message": "The category does not exit"}


def test_create_product_validation(client, headers):
    response = client.post("/api/v1/products", json={"name": "Cola", "price": "cheap"}, headers=headers())
    assert response.status_code == 400
    errors = response.get_json()["error"]
    assert "Category id is required." in errors
    assert "Price must be a number." in errors
    assert "Quantity is required." in errors


def test_product_listing_dispatch(client, headers, beverages):
    for name, quantity in [("Cola", 0), ("Coffee", 5), ("Water", 50)]:
        client.post("/api/v1/products", json=product_body(beverages["category_id"], name=name, quantity=quantity),
                    headers=headers())

    def names(query):
        response = client.get(f"/api/v1/products?{query}", headers=headers())
        return [row["product_name"] for row in response.get_json()["message"]["rows"]]

    assert names("search=co") == ["Cola", "Coffee"]
    assert names(f"catid={beverages['category_id']}&search=wat") == ["Water"]
    assert names("stock=out") == ["Cola"]
    assert names("limit=2&page=2") == ["Water"]


def test_product_listing_rejects_bad_filters(client, headers):
    assert client.get("/api/v1/products?catid=abc", headers=headers()).status_code == 400
    assert client.get("/api/v1/products?stock=lots", headers=headers()).status_code == 400


def test_out_of_range_ids_are_not_found(client, headers):
    huge = 99999999999999999999
    for url in (f"/api/v1/products/{huge}", f"/api/v1/category/{huge}"):
        assert client.get(url, headers=headers()).status_code == 404
    response = client.get(f"/api/v1/products/{huge}", headers=headers())
    assert response.get_json() == {"status": False, "message": "Product not found"}
    assert client.delete(f"/api/v1/users/{huge}", headers=headers("Owner")).status_code == 404


def test_out_of_range_query_values_are_rejected(client, headers):
    huge = "99999999999999999999"
    response = client.get(f"/api/v1/products?limit={huge}", headers=headers())
    assert response.status_code == 400
    assert response.get_json() == {"status": False, "error": ["limit is too large."]}
    response = client.get(f"/api/v1/products?catid={huge}", headers=headers())
    assert response.get_json() == {"status": False, "error": ["catid is too large."]}
    assert client.get(f"/api/v1/users?userid={huge}", headers=headers()).status_code == 400


def test_create_product_rejects_out_of_range_numbers(client, headers, beverages):
    response = client.post("/api/v1/products", json=product_body(99999999999999999999), headers=headers())
    assert response.status_code == 400
    assert response.get_json()["error"] == ["Category id is too large."]
    response = client.post("/api/v1/products", json=product_body(beverages["category_id"], quantity=10 ** 19),
                           headers=headers())
    assert response.get_json()["error"] == ["Quantity is too large."]


@pytest.mark.parametrize("price", ["inf", "-Infinity", "nan"])
def test_create_product_rejects_non_finite_price(client, headers, beverages, price):
    response = client.post("/api/v1/products", json=product_body(beverages["category_id"], price=price),
                           headers=headers())
    assert response.status_code == 400
    assert response.get_json() == {"status": False, "error": ["Price must be a finite number."]}
    assert client.get("/api/v1/products", headers=headers()).get_json()["message"]["rows"] == []


def test_create_product_rejects_fractional_whole_numbers(client, headers, beverages):
    response = client.post("/api/v1/products", json=product_body(1.9, quantity=2.7), headers=headers())
    assert response.status_code == 400
    assert response.get_json()["error"] == ["Category id must be a whole number.", "Quantity must be a whole number."]
    response = client.post("/api/v1/products", json=product_body(beverages["category_id"], quantity=3.0),
                           headers=headers())
    assert response.status_code == 201
    assert response.get_json()["message"]["quantity"] == 3


def test_product_unmatched_search(client, headers, beverages):
    response = client.get("/api/v1/products?search=zzz", headers=headers())
    assert response.status_code == 200
    assert response.get_json()["message"]["message"] == "No product matches your search."


# ---------------- CATEGORIES ----------------
def test_category_routes(client, headers, beverages):
    url = f"/api/v1/category/{beverages['category_id']}"
    listing = client.get("/api/v1/category/", headers=headers("Attendant")).get_json()["message"]
    assert listing["rows"] == [beverages]

    renamed = client.put(url, json={"name": "Drinks"}, headers=headers())
    assert renamed.get_json()["message"]["category_name"] == "Drinks"

    duplicate = client.post("/api/v1/category", json={"name": "Drinks"}, headers=headers())
    assert duplicate.status_code == 400

    assert client.delete(url, headers=headers()).status_code == 200
    assert client.get(url, headers=headers()).status_code == 404


# ---------------- STAFF ----------------
def test_signup(client, headers):
    body = {"name": "Kemi", "email": "kemi@shop.test", "password": "kemi-pass", "role": "Attendant"}
    response = client.post("/api/v1/auth/signup", json=body, headers=headers("Admin"))
    assert response.status_code == 201
    user = response.get_json()["message"]
    assert user["role"] == "Attendant"
    assert "password" not in user


def test_only_owner_signs_up_admins(client, headers):
    body = {"name": "Bola", "email": "bola@shop.test", "password": "bola-pass", "role": "Admin"}
    assert client.post("/api/v1/auth/signup", json=body, headers=headers("Admin")).status_code == 403
    assert client.post("/api/v1/auth/signup", json=body, headers=headers("Owner")).status_code == 201


def test_users_listing_and_lookup(client, headers, users):
    listing = client.get("/api/v1/users", headers=headers()).get_json()["message"]
    assert len(listing["rows"]) == 3

    single = client.get(f"/api/v1/users/?userid={users['Admin']['id']}", headers=headers())
    assert single.get_json()["message"]["email"] == "admin@shop.test"


def test_owner_updates_staff(client, headers, users):
    url = f"/api/v1/users/{users['Attendant']['id']}"
    response = client.put(url, json={"role": "Admin"}, headers=headers("Owner"))
    assert response.status_code == 200
    assert response.get_json()["message"]["role"] == "Admin"
