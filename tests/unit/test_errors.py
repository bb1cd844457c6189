"""Tests for cm_common.errors and cm_common.response."""

from src.cm_common.errors import (
    AppError,
    DomainNotAllowedError,
    ListingCreateError,
    ListingLoadError,
    ListingNotFoundError,
    ListingUpdateError,
    NotAuthenticatedError,
    NotListingOwnerError,
    PersistenceError,
    UnexpectedError,
    ValidationError,
)
from src.cm_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1001, message="test"), Exception)


class TestSpecificErrors:
    def test_validation_error_carries_field(self) -> None:
        err = ValidationError("price", "Please enter a valid non-negative price")
        assert err.code == 1001
        assert err.http_status == 422
        assert err.field == "price"

    def test_domain_not_allowed(self) -> None:
        err = DomainNotAllowedError("gmail.com")
        assert err.code == 2002
        assert err.domain == "gmail.com"
        assert "college email" in err.message

    def test_not_authenticated(self) -> None:
        err = NotAuthenticatedError()
        assert err.code == 2004
        assert err.http_status == 401

    def test_not_owner(self) -> None:
        err = NotListingOwnerError("lst-1")
        assert err.http_status == 403
        assert "lst-1" in err.message

    def test_persistence_family(self) -> None:
        for err in (ListingLoadError("iitd-ac-in"), ListingCreateError(), ListingUpdateError("x")):
            assert isinstance(err, PersistenceError)
            assert err.http_status == 502

    def test_user_facing_messages(self) -> None:
        assert ListingCreateError().message == "Failed to list your item. Please try again."
        assert ListingUpdateError("x").message == "Failed to update item status. Please try again."

    def test_not_found(self) -> None:
        err = ListingNotFoundError("lst-9")
        assert err.code == 3004
        assert err.http_status == 404

    def test_unexpected(self) -> None:
        assert UnexpectedError().code == 9001


class TestApiResponse:
    def test_success_defaults(self) -> None:
        resp = success_response({"a": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"a": 1}
        assert resp.field is None
        assert resp.request_id.startswith("req_")

    def test_error_response(self) -> None:
        resp = error_response(1001, "This field is required", field="title")
        assert resp.code == 1001
        assert resp.data is None
        assert resp.field == "title"

    def test_serializes(self) -> None:
        body = ApiResponse(message="ok").model_dump()
        assert set(body) == {"code", "message", "data", "field", "timestamp", "request_id"}
