"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from solar_quotes.infrastructure.database.models import User


QUOTE_BODY = {"systemSizeKw": 5, "monthlyConsumptionKwh": 500, "downPayment": 1000}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "solar_quote_created_total" in response.text


def test_request_id_propagated(client: TestClient):
    """Test caller-supplied request ID is echoed back"""
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_missing_token_rejected(client: TestClient):
    """Test quote routes require a bearer token"""
    assert client.get("/v1/quotes").status_code == 401
    assert client.post("/v1/quotes", json=QUOTE_BODY).status_code == 401


def test_invalid_token_rejected(client: TestClient, alice: User):
    """Test tokens signed with another secret are refused"""
    token = jwt.encode({"userId": alice.id, "roleName": "USER"}, "wrong-secret", algorithm="HS256")
    response = client.get("/v1/quotes", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_create_quote_endpoint(client: TestClient, alice: User, auth_headers):
    """Test POST /v1/quotes"""
    response = client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice))

    assert response.status_code == 201
    data = response.json()
    assert data["userId"] == alice.id
    assert data["systemPrice"] == 6000
    assert data["principalAmount"] == 5000
    assert data["riskBand"] == "A"
    assert data["baseApr"] == 6.9
    assert data["currency"] == "USD"
    assert data["fullName"] == "Alice Sun"
    assert data["email"] == "alice@example.com"
    assert data["address"] == "1 Solar Way"
    assert [o["termYears"] for o in data["offers"]] == [5, 10, 15]
    assert all(o["apr"] == 6.9 and o["principalUsed"] == 5000 for o in data["offers"])
    assert data["offers"][0]["monthlyPayment"] > 0
    assert "author" not in data


def test_create_quote_with_currency(client: TestClient, alice: User, auth_headers):
    """Test currency is stored as given"""
    response = client.post("/v1/quotes", json={**QUOTE_BODY, "currency": "EUR"}, headers=auth_headers(alice))

    assert response.status_code == 201
    assert response.json()["currency"] == "EUR"
    assert response.json()["systemPrice"] == 6000


@pytest.mark.parametrize(
    "body",
    [
        {"systemSizeKw": 0, "monthlyConsumptionKwh": 500, "downPayment": 1000},
        {"systemSizeKw": 5, "monthlyConsumptionKwh": -1, "downPayment": 1000},
        {"systemSizeKw": 5, "monthlyConsumptionKwh": 500, "downPayment": -1},
        {"systemSizeKw": 5, "monthlyConsumptionKwh": 500},
    ],
)
def test_create_quote_invalid_body(client: TestClient, alice: User, auth_headers, body: dict):
    """Test input constraints are enforced before pricing"""
    response = client.post("/v1/quotes", json=body, headers=auth_headers(alice))
    assert response.status_code == 422


def test_create_quote_zero_down_payment(client: TestClient, alice: User, auth_headers):
    """Test a zero down payment is accepted"""
    response = client.post("/v1/quotes", json={**QUOTE_BODY, "downPayment": 0}, headers=auth_headers(alice))

    assert response.status_code == 201
    assert response.json()["principalAmount"] == 6000


def test_create_quote_unknown_user(client: TestClient, make_token):
    """Test a token for a user missing from the store fails creation"""
    ghost = User(id="ghost", full_name="Ghost", email="ghost@example.com", role_name="USER")
    response = client.post("/v1/quotes", json=QUOTE_BODY, headers={"Authorization": f"Bearer {make_token(ghost)}"})
    assert response.status_code == 500


def test_get_quote_endpoint(client: TestClient, alice: User, auth_headers):
    """Test GET /v1/quotes/{quote_id} for the owner"""
    quote_id = client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice)).json()["id"]

    response = client.get(f"/v1/quotes/{quote_id}", headers=auth_headers(alice))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == quote_id
    assert data["author"] == {"id": alice.id, "fullName": "Alice Sun", "email": "alice@example.com"}
    assert data["address"] == "1 Solar Way"


def test_get_quote_other_user_not_found(client: TestClient, alice: User, bob: User, admin: User, auth_headers):
    """Test non-owners, admins included, get 404"""
    quote_id = client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice)).json()["id"]

    assert client.get(f"/v1/quotes/{quote_id}", headers=auth_headers(bob)).status_code == 404
    assert client.get(f"/v1/quotes/{quote_id}", headers=auth_headers(admin)).status_code == 404


def test_list_quotes_scoped(client: TestClient, alice: User, bob: User, admin: User, auth_headers):
    """Test GET /v1/quotes visibility for users and admins"""
    client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice))
    client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice))
    client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(bob))

    own = client.get("/v1/quotes", headers=auth_headers(alice)).json()
    assert own["totalCount"] == 2
    assert own["totalPages"] == 1
    assert own["currentPage"] == 1
    assert all(q["userId"] == alice.id for q in own["quotes"])

    everything = client.get("/v1/quotes", headers=auth_headers(admin)).json()
    assert everything["totalCount"] == 3
    assert {q["userId"] for q in everything["quotes"]} == {alice.id, bob.id}


def test_list_quotes_pagination(client: TestClient, alice: User, auth_headers):
    """Test page/limit query parameters"""
    client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice))
    client.post("/v1/quotes", json=QUOTE_BODY, headers=auth_headers(alice))

    response = client.get("/v1/quotes?page=2&limit=1", headers=auth_headers(alice))

    assert response.status_code == 200
    data = response.json()
    assert data["totalCount"] == 2
    assert data["totalPages"] == 2
    assert data["currentPage"] == 2
    assert len(data["quotes"]) == 1


def test_list_quotes_empty(client: TestClient, bob: User, auth_headers):
    """Test empty listing"""
    data = client.get("/v1/quotes", headers=auth_headers(bob)).json()
    assert data == {"quotes": [], "totalCount": 0, "totalPages": 0, "currentPage": 1}


@pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101"])
def test_list_quotes_invalid_bounds(client: TestClient, alice: User, auth_headers, query: str):
    """Test out-of-range pagination is a 400"""
    response = client.get(f"/v1/quotes?{query}", headers=auth_headers(alice))
    assert response.status_code == 400
