"""Error hierarchy - verifies codes, statuses and the REST envelope."""

import pytest

from marketplace.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, ErrorContext,
    EventNotOnSaleError,
    FixtureNotFoundError, InvalidArgumentError, InvalidCredentialsError,
    MarketplaceError, PermissionDeniedError, ResourceNotFoundError,
    SoldOutError, TicketLimitExceededError,
)


@pytest.mark.parametrize("error, code, status", [
    (InvalidArgumentError("bad", "quantity"), "INVALID_ARGUMENT", 400),
    (TicketLimitExceededError(9, 5), "TICKET_LIMIT_EXCEEDED", 400),
    (AuthenticationError(), "AUTHENTICATION_REQUIRED", 401),
    (InvalidCredentialsError(), "INVALID_CREDENTIALS", 401),
    (PermissionDeniedError("no"), "PERMISSION_DENIED", 403),
    (ResourceNotFoundError("Event", "99"), "RESOURCE_NOT_FOUND", 404),
    (SoldOutError("1", 0), "SOLD_OUT", 409),
    (EventNotOnSaleError("1", "cancelled"), "EVENT_NOT_ACTIVE", 409),
    (ConflictError("taken"), "CONFLICT", 409),
    (DatabaseError("down", "execute"), "DATABASE_ERROR", 503),
    (FixtureNotFoundError("events"), "FIXTURE_NOT_FOUND", 500),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, MarketplaceError)
    assert error.code == code
    assert error.http_status == status


def test_envelope_shape():
    body = InvalidArgumentError("quantity must be positive", "quantity").to_response()
    error = body["error"]
    assert error["code"] == "INVALID_ARGUMENT"
    assert error["message"] == "quantity must be positive"
    assert error["category"] == "validation"
    assert error["context"]["field"] == "quantity"
    assert "timestamp" in error


def test_sold_out_carries_event_id_in_context():
    body = SoldOutError("3", 2, ErrorContext(user_id="u-1")).to_response()
    assert body["error"]["context"]["event_id"] == "3"
    assert body["error"]["context"]["user_id"] == "u-1"


def test_invalid_credentials_is_an_authentication_error():
    assert isinstance(InvalidCredentialsError(), AuthenticationError)
