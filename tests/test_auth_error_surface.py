import pytest

from src.domain.auth_errors import (
    RejectionReason,
    map_rejection,
    server_error_surface,
)


def test_invalid_credentials_copy_is_generic():
    surface = map_rejection(RejectionReason.INVALID_CREDENTIALS)

    assert surface.category == "credentials"
    assert surface.headline == "Invalid credentials"
    assert "email or password" in surface.detail
    for word in ("exist", "suspend", "organization", "found"):
        assert word not in surface.detail.lower()


@pytest.mark.parametrize(
    ("reason", "needle"),
    [
        (RejectionReason.ACCOUNT_INACTIVE, "account is temporarily disabled"),
        (RejectionReason.ACCOUNT_SUSPENDED, "account has been suspended"),
        (RejectionReason.ACCOUNT_PENDING, "account is pending approval"),
        (RejectionReason.ORGANIZATION_INACTIVE, "organization's account is temporarily disabled"),
        (RejectionReason.ORGANIZATION_SUSPENDED, "organization's account has been suspended"),
        (RejectionReason.ORGANIZATION_PENDING, "organization's account is pending approval"),
    ],
)
def test_status_rejections_are_specific(reason, needle):
    surface = map_rejection(reason)

    assert surface.category == "credentials"
    assert needle in surface.detail


def test_every_reason_has_distinct_copy():
    details = {map_rejection(reason).detail for reason in RejectionReason}

    assert len(details) == len(RejectionReason)


def test_mapping_accepts_reason_values():
    assert map_rejection("AccountSuspended") == map_rejection(RejectionReason.ACCOUNT_SUSPENDED)


def test_server_error_surface():
    surface = server_error_surface()

    assert surface.category == "server"
    assert "try again later" in surface.detail
    assert surface.as_detail() == {
        "category": "server",
        "headline": "Server error",
        "detail": surface.detail,
    }
