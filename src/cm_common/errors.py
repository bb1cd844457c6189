"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation (bad user input, caught before any network call)
  2xxx: Auth/Session
  3xxx: Persistence (hosted row API)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationError(AppError):
    """Field-level input error. The user corrects the field and resubmits."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(1001, message, 422)


# --- 2xxx: Auth/Session ---

class InvalidCredentialsError(AppError):
    def __init__(self, detail: str = "Invalid email or password") -> None:
        super().__init__(2001, detail, 401)


class DomainNotAllowedError(AppError):
    def __init__(self, domain: str | None) -> None:
        self.domain = domain
        super().__init__(
            2002, "Please use your college email address to sign up", 422
        )


class OAuthError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2003, f"Sign-in failed: {detail}", 400)


class NotAuthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(2004, "Please log in with your college email", 401)


class NotListingOwnerError(AppError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(2005, f"Only the seller can change listing {listing_id}", 403)


class AuthUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2006, f"Authentication service unavailable: {detail}", 503)


# --- 3xxx: Persistence ---

class PersistenceError(AppError):
    """Row API failure. In-memory state stays at its last-known-good value."""

    def __init__(self, code: int, message: str, http_status: int = 502) -> None:
        super().__init__(code, message, http_status)


class ListingLoadError(PersistenceError):
    def __init__(self, campus: str) -> None:
        self.campus = campus
        super().__init__(3001, "Failed to load listings. Please try again.")


class ListingCreateError(PersistenceError):
    def __init__(self) -> None:
        super().__init__(3002, "Failed to list your item. Please try again.")


class ListingUpdateError(PersistenceError):
    def __init__(self, listing_id: str) -> None:
        self.listing_id = listing_id
        super().__init__(3003, "Failed to update item status. Please try again.")


class ListingNotFoundError(PersistenceError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(3004, f"Listing not found: {listing_id}", 404)


# --- 9xxx: System ---

class UnexpectedError(AppError):
    def __init__(self, detail: str = "An unexpected error occurred. Please try again.") -> None:
        super().__init__(9001, detail, 500)
