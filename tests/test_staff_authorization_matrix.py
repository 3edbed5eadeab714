import pytest
from fastapi.testclient import TestClient

from src.auth.claims import SessionClaims
from src.auth.jwt import create_session_token
from src.domain.principals import PrincipalKind
from src.main import app

STAFF_ENDPOINTS = [
    ("get", "/api/staff/organizations", None),
    ("post", "/api/staff/organizations", {}),
    ("get", "/api/staff/organizations/org-acme", None),
    ("patch", "/api/staff/organizations/org-acme", {"plan": "basic"}),
    ("patch", "/api/staff/organizations/org-acme/status", {"status": "SUSPENDED"}),
    ("delete", "/api/staff/organizations/org-acme", None),
    ("patch", "/api/staff/principals/customer-user/cu-john/status", {"status": "SUSPENDED"}),
    ("get", "/api/staff/metrics", None),
]


def _call(client: TestClient, method: str, path: str, body, headers=None):
    kwargs = {"headers": headers or {}, "follow_redirects": False}
    if body is not None:
        kwargs["json"] = body
    return client.request(method.upper(), path, **kwargs)


@pytest.mark.parametrize(("method", "path", "body"), STAFF_ENDPOINTS)
def test_staff_endpoints_redirect_without_session(fake_db, install_db, method, path, body):
    install_db(fake_db)
    client = TestClient(app)

    response = _call(client, method, path, body)

    assert response.status_code == 303
    assert response.headers["location"].startswith("/auth/staff/signin?callbackUrl=")
    assert fake_db.calls == []


@pytest.mark.parametrize(("method", "path", "body"), STAFF_ENDPOINTS)
def test_staff_endpoints_reject_customer_sessions(fake_db, install_db, method, path, body):
    install_db(fake_db)
    client = TestClient(app)
    token = create_session_token(
        SessionClaims(
            principal_id="cu-john",
            email="john@acmecorp.com",
            principal_kind=PrincipalKind.CUSTOMER_USER,
            effective_role="customer-user",
            organization_role="Owner",
            organization_id="org-acme",
        )
    )

    response = _call(client, method, path, body, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 303
    assert fake_db.row("organizations", "org-acme")["status"] == "ACTIVE"
    assert fake_db.row("organizations", "org-acme")["deleted_at"] is None


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/customer/accounts"),
        ("post", "/api/customer/accounts"),
    ],
)
def test_customer_endpoints_reject_staff_sessions(method, path):
    client = TestClient(app)
    token = create_session_token(
        SessionClaims(
            principal_id="st-1",
            email="admin001@admin.com",
            principal_kind=PrincipalKind.STAFF,
            effective_role="Administrator",
        )
    )

    response = client.request(
        method.upper(),
        path,
        headers={"Authorization": f"Bearer {token}"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"].startswith("/auth/customer/signin?")
