from fastapi.testclient import TestClient

from src.auth.claims import SessionClaims
from src.auth.jwt import create_session_token
from src.domain.principals import PrincipalKind
from src.main import app


def _customer_client(principal_id: str, org_id: str) -> TestClient:
    client = TestClient(app)
    token = create_session_token(
        SessionClaims(
            principal_id=principal_id,
            email=f"{principal_id}@example.com",
            principal_kind=PrincipalKind.CUSTOMER_USER,
            effective_role="customer-user",
            organization_role="Owner",
            organization_id=org_id,
        )
    )
    client.headers["Authorization"] = f"Bearer {token}"
    return client


ACCOUNT = {
    "platform": "meta",
    "account_id": "act_1001",
    "account_name": "Acme Meta",
    "access_token": "EAAB-secret-token",
}


def test_connect_account_hides_access_token(fake_db, install_db):
    install_db(fake_db)
    client = _customer_client("cu-john", "org-acme")

    response = client.post("/api/customer/accounts", json=ACCOUNT)

    assert response.status_code == 201
    body = response.json()
    assert body["org_id"] == "org-acme"
    assert body["platform"] == "meta"
    assert "access_token" not in body
    assert fake_db.rows("connected_ad_accounts")[0]["access_token"] == "EAAB-secret-token"


def test_accounts_are_scoped_to_session_organization(fake_db, install_db):
    install_db(fake_db)
    acme = _customer_client("cu-john", "org-acme")
    tech = _customer_client("cu-alice", "org-tech")
    acme.post("/api/customer/accounts", json=ACCOUNT)
    tech.post("/api/customer/accounts", json={**ACCOUNT, "account_id": "act_2002", "account_name": "Tech Meta"})

    acme_accounts = acme.get("/api/customer/accounts").json()
    tech_accounts = tech.get("/api/customer/accounts").json()

    assert [a["account_id"] for a in acme_accounts] == ["act_1001"]
    assert [a["account_id"] for a in tech_accounts] == ["act_2002"]
    assert all("access_token" not in a for a in acme_accounts + tech_accounts)


def test_same_account_in_another_organization_is_allowed(fake_db, install_db):
    install_db(fake_db)
    _customer_client("cu-john", "org-acme").post("/api/customer/accounts", json=ACCOUNT)

    response = _customer_client("cu-alice", "org-tech").post("/api/customer/accounts", json=ACCOUNT)

    assert response.status_code == 201


def test_duplicate_account_is_conflict(fake_db, install_db):
    install_db(fake_db)
    client = _customer_client("cu-john", "org-acme")
    client.post("/api/customer/accounts", json=ACCOUNT)

    response = client.post("/api/customer/accounts", json={**ACCOUNT, "access_token": "other"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Account already connected for this platform"
    assert len(fake_db.rows("connected_ad_accounts")) == 1


def test_unknown_platform_is_validation_error(fake_db, install_db):
    install_db(fake_db)
    client = _customer_client("cu-john", "org-acme")

    response = client.post("/api/customer/accounts", json={**ACCOUNT, "platform": "myspace"})

    assert response.status_code == 422
    assert response.json()["detail"]["errors"][0]["field"] == "platform"
    assert fake_db.rows("connected_ad_accounts") == []
