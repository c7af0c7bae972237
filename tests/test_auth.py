from bistro.core.security import verify_token

from tests.conftest import ADMIN_EMAIL, CUSTOMER_EMAIL, bearer


def test_root_is_plaintext(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Bistro Boss server is running!"


def test_jwt_issues_token_for_posted_identity(client):
    response = client.post("/jwt", json={"email": CUSTOMER_EMAIL, "name": "Jane"})

    assert response.status_code == 200
    claims = verify_token(response.json()["token"]).claims
    assert claims["email"] == CUSTOMER_EMAIL
    assert claims["name"] == "Jane"


def test_admin_route_without_header_is_401(client):
    response = client.get("/users")

    assert response.status_code == 401
    assert response.json() == {"auth": False, "message": "Not authorized"}


def test_admin_route_with_non_bearer_scheme_is_401(client):
    response = client.get("/users", headers={"Authorization": "Basic amFuZTpwdw=="})
    assert response.status_code == 401


def test_admin_route_with_bad_token_is_401(client):
    response = client.get("/users", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_admin_route_with_customer_token_is_403(client, customer_headers):
    response = client.get("/users", headers=customer_headers)

    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}


def test_admin_route_with_unknown_user_is_403(client):
    response = client.get("/users", headers=bearer("ghost@bistroboss.com"))
    assert response.status_code == 403


def test_admin_route_with_admin_token(client, admin_headers, customer_headers):
    response = client.get("/users", headers=admin_headers)

    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert emails == {ADMIN_EMAIL, CUSTOMER_EMAIL}
    assert all(isinstance(u["_id"], str) for u in response.json())


def test_admin_status_for_self(client, admin_headers, customer_headers):
    assert client.get(f"/users/admin/{ADMIN_EMAIL}", headers=admin_headers).json() == {"admin": True}
    assert client.get(f"/users/admin/{CUSTOMER_EMAIL}", headers=customer_headers).json() == {"admin": False}


def test_admin_status_for_someone_else_is_403(client, admin_headers, customer_headers):
    response = client.get(f"/users/admin/{ADMIN_EMAIL}", headers=customer_headers)
    assert response.status_code == 403


def test_admin_status_requires_token(client):
    assert client.get(f"/users/admin/{ADMIN_EMAIL}").status_code == 401


def test_health_reports_database_and_payment_provider(client):
    body = client.get("/health").json()

    assert body["status"] == "operational"
    assert body["database"] == "healthy"
    assert body["payment_provider"] == "mock"
