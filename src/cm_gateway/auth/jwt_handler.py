"""Access-token inspection.

The client never holds the signing secret; the hosted auth service verifies
tokens on every request. Claims are read unverified only to learn the email
and the expiry time of the current session.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from src.cm_common.errors import InvalidCredentialsError
from src.cm_gateway.auth.provider import AuthSession

# Refresh slightly early so a request never races the expiry
EXPIRY_LEEWAY = timedelta(seconds=30)


def read_claims(token: str) -> dict[str, Any]:
    """Unverified claims of `token`; raises InvalidCredentialsError if malformed."""
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        raise InvalidCredentialsError("Malformed access token") from None


def session_from_token_response(body: dict[str, Any]) -> AuthSession:
    """Build an AuthSession from a token-grant response body."""
    access_token = body.get("access_token")
    refresh_token = body.get("refresh_token")
    if not access_token or not refresh_token:
        raise InvalidCredentialsError("Token response without a session")

    claims = read_claims(access_token)
    email = (body.get("user") or {}).get("email") or claims.get("email")
    if not email:
        raise InvalidCredentialsError("Session has no email address")

    if "exp" in claims:
        expires_at = datetime.fromtimestamp(int(claims["exp"]), UTC)
    else:
        expires_at = datetime.now(UTC) + timedelta(seconds=int(body.get("expires_in", 3600)))

    return AuthSession(
        email=email,
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )


def is_expired(session: AuthSession, now: datetime | None = None) -> bool:
    now = now or datetime.now(UTC)
    return now >= session.expires_at - EXPIRY_LEEWAY
