# tests/test_products_api.py
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import ProductStore
from product_api.main import create_app

API_KEY = "test-key"
HEADERS = {"x-api-key": API_KEY}
SEED_IDS = {"1", "2", "3"}

def make_client(store=None, raise_server_exceptions=True, **kwargs):
    store = store if store is not None else ProductStore.seeded()
    app = create_app(Settings(api_key=API_KEY), store, **kwargs)
    return TestClient(app, raise_server_exceptions=raise_server_exceptions), store

def payload(**overrides):
    body = {
        "name": "Desk Lamp",
        "description": "LED lamp with dimmer",
        "price": 35,
        "category": "home",
        "inStock": True,
    }
    body.update(overrides)
    return body

class FakeLog:
    def __init__(self):
        self.events = []

    def info(self, event, **kw):
        self.events.append((event, kw))

# ---------------------------
# Root and authentication
# ---------------------------
def test_root_is_public_plain_text():
    client, _ = make_client()
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Welcome to the Product API! Go to /api/products to see all products."
    assert r.headers["content-type"].startswith("text/plain")

def test_api_requires_key():
    client, _ = make_client()
    unauthorized = {"error": "Unauthorized. API key missing or invalid."}
    for method, path in [("GET", "/api/products"), ("GET", "/api/products/1"),
                         ("DELETE", "/api/products/1"), ("GET", "/api/does-not-exist"),
                         ("GET", "/API/products")]:
        r = client.request(method, path)
        assert r.status_code == 401, (method, path)
        assert r.json() == unauthorized
    r = client.get("/api/products", headers={"x-api-key": "wrong"})
    assert r.status_code == 401

def test_rejected_requests_do_not_mutate_store():
    client, store = make_client()
    r = client.post("/api/products", json=payload())
    assert r.status_code == 401
    r = client.put("/api/products/1", json=payload(), headers={"x-api-key": "nope"})
    assert r.status_code == 401
    r = client.delete("/api/products/1")
    assert r.status_code == 401
    assert len(store) == 3
    assert store.get_by_id("1").name == "Laptop"

def test_unconfigured_key_rejects_everything():
    app = create_app(Settings(api_key=None), ProductStore.seeded())
    client = TestClient(app)
    assert client.get("/api/products", headers={"x-api-key": ""}).status_code == 401
    assert client.get("/").status_code == 200

def test_logger_sees_every_request():
    log = FakeLog()
    client, _ = make_client(request_log=log)
    client.get("/")
    client.get("/api/products?category=kitchen")
    client.delete("/api/products/1", headers=HEADERS)
    assert [e for e, _ in log.events] == ["request_received"] * 3
    assert [(kw["method"], kw["path"]) for _, kw in log.events] == [
        ("GET", "/"),
        ("GET", "/api/products?category=kitchen"),
        ("DELETE", "/api/products/1"),
    ]
    assert all(kw["timestamp"] for _, kw in log.events)

# ---------------------------
# Listing and filters
# ---------------------------
def test_list_returns_seed_in_order():
    client, _ = make_client()
    r = client.get("/api/products", headers=HEADERS)
    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body] == ["Laptop", "Smartphone", "Coffee Maker"]
    assert body[2] == {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "category": "kitchen",
        "price": 50,
        "inStock": False,
    }

def test_filters_compose():
    client, _ = make_client()
    r = client.get("/api/products", params={"category": "electronics", "minPrice": "900"}, headers=HEADERS)
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Laptop"]

def test_filter_semantics():
    client, _ = make_client()

    def names(**params):
        r = client.get("/api/products", params=params, headers=HEADERS)
        assert r.status_code == 200
        return [p["name"] for p in r.json()]

    assert names(category="ELECTRONICS") == ["Laptop", "Smartphone"]
    assert names(category="electro") == []
    assert names(maxPrice="800") == ["Smartphone", "Coffee Maker"]
    assert names(minPrice="50", maxPrice="50") == ["Coffee Maker"]
    assert names(name="PHONE") == ["Smartphone"]
    assert names(name="o", category="kitchen") == ["Coffee Maker"]
    assert names(minPrice="") == ["Laptop", "Smartphone", "Coffee Maker"]

def test_non_numeric_price_bound_is_rejected():
    client, _ = make_client()
    r = client.get("/api/products", params={"minPrice": "cheap"}, headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "minPrice must be a number."}
    r = client.get("/api/products", params={"maxPrice": "nan"}, headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "maxPrice must be a number."}

# ---------------------------
# Single product
# ---------------------------
def test_get_by_id():
    client, _ = make_client()
    r = client.get("/api/products/1", headers=HEADERS)
    assert r.status_code == 200
    assert r.json()["name"] == "Laptop"
    # exactly one trailing slash is tolerated
    assert client.get("/api/products/1/", headers=HEADERS).status_code == 200
    assert client.get("/api/products/", headers=HEADERS).status_code == 200
    for path in ("/api/products///", "/api/products/1//"):
        r = client.get(path, headers=HEADERS)
        assert r.status_code == 404, path
        assert r.json() == {"error": "Not Found"}

def test_unknown_id_is_404_everywhere():
    client, store = make_client()
    not_found = {"error": "Product not found"}
    for method, kwargs in [("GET", {}), ("PUT", {"json": payload()}), ("DELETE", {})]:
        r = client.request(method, "/api/products/missing", headers=HEADERS, **kwargs)
        assert r.status_code == 404, method
        assert r.json() == not_found
    assert len(store) == 3

def test_unknown_route_is_404():
    client, _ = make_client()
    r = client.get("/api/widgets", headers=HEADERS)
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}
    r = client.patch("/api/products/1", json={"price": 1}, headers=HEADERS)
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}
    # routes are case-sensitive once the key has been checked
    assert client.get("/API/products", headers=HEADERS).status_code == 404

def test_head_is_answered_on_get_routes():
    client, _ = make_client()
    assert client.head("/").status_code == 200
    assert client.head("/api/products", headers=HEADERS).status_code == 200
    assert client.head("/api/products/1", headers=HEADERS).status_code == 200
    assert client.head("/api/products/missing", headers=HEADERS).status_code == 404
    assert client.head("/api/products").status_code == 401

# ---------------------------
# Create
# ---------------------------
def test_create_assigns_fresh_id_and_lists_record():
    client, _ = make_client()
    r = client.post("/api/products", json=payload(), headers=HEADERS)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] not in SEED_IDS
    assert {k: v for k, v in created.items() if k != "id"} == payload()

    listed = client.get("/api/products", headers=HEADERS).json()
    assert listed[-1] == created
    assert len(listed) == 4

def test_create_accepts_in_stock_false_and_ignores_extras():
    client, _ = make_client()
    r = client.post("/api/products", json=payload(inStock=False, price=19.99, id="forced", color="red"),
                    headers=HEADERS)
    assert r.status_code == 201
    body = r.json()
    assert body["inStock"] is False
    assert body["price"] == 19.99
    assert body["id"] != "forced"
    assert "color" not in body

def test_create_validation_messages():
    client, store = make_client()
    required = {"error": "All product fields are required."}
    positive = {"error": "Price must be a positive number."}

    body = payload()
    del body["inStock"]
    r = client.post("/api/products", json=body, headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == required

    for bad in (payload(name=""), payload(description=None), payload(category=""), payload(price=None)):
        r = client.post("/api/products", json=bad, headers=HEADERS)
        assert r.status_code == 400
        assert r.json() == required

    for bad_price in (0, -5, "100", True):
        r = client.post("/api/products", json=payload(price=bad_price), headers=HEADERS)
        assert r.status_code == 400, bad_price
        assert r.json() == positive

    assert len(store) == 3

def test_create_with_missing_or_bad_body():
    client, store = make_client()
    r = client.post("/api/products", headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "All product fields are required."}

    r = client.post("/api/products", content=b"{not json", headers={**HEADERS, "content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body."}

    r = client.post("/api/products", json=payload(name=123), headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product payload."}
    assert len(store) == 3

def post_raw(client, body):
    return client.post("/api/products", content=body,
                       headers={**HEADERS, "content-type": "application/json"})

def test_non_finite_price_is_rejected():
    client, store = make_client()
    for number in (b"1e999", b"-1e999", b"NaN", b"Infinity"):
        body = b'{"name": "X", "description": "d", "price": ' + number + b', "category": "c", "inStock": true}'
        r = post_raw(client, body)
        assert r.status_code == 400, number
        assert r.json() == {"error": "Price must be a positive number."}
    assert len(store) == 3

    # the collection stays listable
    r = client.get("/api/products", headers=HEADERS)
    assert r.status_code == 200
    assert len(r.json()) == 3

# ---------------------------
# Replace
# ---------------------------
def test_put_replaces_every_field():
    client, _ = make_client()
    new = payload(name="Ultrabook", description="Thin and light", price=999.5,
                  category="computers", inStock=False)
    r = client.put("/api/products/1", json=new, headers=HEADERS)
    assert r.status_code == 200
    assert r.json() == {"id": "1", **new}
    assert client.get("/api/products/1", headers=HEADERS).json() == {"id": "1", **new}
    # position in the collection is unchanged
    assert [p["id"] for p in client.get("/api/products", headers=HEADERS).json()] == ["1", "2", "3"]

def test_put_validation_leaves_record_untouched():
    client, _ = make_client()
    r = client.put("/api/products/2", json=payload(price=0), headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "Price must be a positive number."}
    assert client.get("/api/products/2", headers=HEADERS).json()["price"] == 800

def test_put_requires_a_real_boolean_in_stock():
    client, _ = make_client()
    for bad in ("yes", "false", 1, 0):
        r = client.put("/api/products/1", json=payload(inStock=bad), headers=HEADERS)
        assert r.status_code == 400, bad
        assert r.json() == {"error": "Invalid product payload."}
    assert client.get("/api/products/1", headers=HEADERS).json()["inStock"] is True

def test_put_keeps_the_price_type_sent():
    client, _ = make_client()
    r = client.put("/api/products/3", json=payload(price=5.0), headers=HEADERS)
    assert r.status_code == 200
    assert isinstance(r.json()["price"], float)
    r = client.put("/api/products/3", json=payload(price=5), headers=HEADERS)
    assert isinstance(r.json()["price"], int)

def test_put_validates_before_looking_up_the_id():
    client, _ = make_client()
    r = client.put("/api/products/missing", json=payload(price=-1), headers=HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "Price must be a positive number."}

# ---------------------------
# Delete
# ---------------------------
def test_delete_once_then_404():
    client, _ = make_client()
    r = client.delete("/api/products/2", headers=HEADERS)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product deleted"
    assert body["product"]["name"] == "Smartphone"

    for _ in range(3):
        r = client.delete("/api/products/2", headers=HEADERS)
        assert r.status_code == 404
        assert r.json() == {"error": "Product not found"}

    ids = [p["id"] for p in client.get("/api/products", headers=HEADERS).json()]
    assert ids == ["1", "3"]

# ---------------------------
# Unhandled failures
# ---------------------------
class BrokenStore(ProductStore):
    def list(self, product_filter=None):
        raise RuntimeError("disk on fire")

def test_unexpected_error_becomes_500():
    client, _ = make_client(store=BrokenStore(), raise_server_exceptions=False)
    r = client.get("/api/products", headers=HEADERS)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}
