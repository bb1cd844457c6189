"""SupabaseAuthProvider — hosted auth (GoTrue) over httpx.

Implements AuthProviderProtocol:
  POST /auth/v1/signup                       email + password registration
  POST /auth/v1/token?grant_type=password    password sign-in
  POST /auth/v1/token?grant_type=refresh_token
  POST /auth/v1/token?grant_type=pkce        OAuth / magic-link callback code
  GET  /auth/v1/authorize                    OAuth redirect (built, not fetched)
  POST /auth/v1/otp                          magic link
  POST /auth/v1/logout

Redirect-based flows use PKCE: the code verifier is kept in local storage
until the callback exchanges the code. The refresh token is persisted the
same way so a restarted client can restore its session on startup.
"""

import base64
import hashlib
import logging
import secrets
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

import httpx

from src.cm_campus.domain.resolver import extract_domain
from src.cm_common.errors import (
    AuthUnavailableError,
    DomainNotAllowedError,
    InvalidCredentialsError,
    OAuthError,
)
from src.cm_common.supabase_client import bearer
from src.cm_gateway.auth.jwt_handler import is_expired, session_from_token_response
from src.cm_gateway.auth.local_storage import LocalStorage
from src.cm_gateway.auth.provider import AuthListener, AuthSession

logger = logging.getLogger(__name__)

REFRESH_TOKEN_KEY = "campus-mart.auth.refresh-token"
CODE_VERIFIER_KEY = "campus-mart.auth.code-verifier"

_AUTH_PATH = "/auth/v1"


def _pkce_pair() -> tuple[str, str]:
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    return str(
        body.get("error_description")
        or body.get("msg")
        or body.get("message")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )


class SupabaseAuthProvider:
    def __init__(
        self,
        client: httpx.AsyncClient,
        storage: LocalStorage,
        redirect_url: str,
        email_gate: Callable[[str], bool] | None = None,
    ) -> None:
        self._client = client
        self._storage = storage
        self._redirect_url = redirect_url
        self._email_gate = email_gate
        self._session: AuthSession | None = None
        self._listeners: list[AuthListener] = []

    # -----------------------------------------------------------------------
    # Session events
    # -----------------------------------------------------------------------

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _emit(self, email: str | None) -> None:
        for listener in list(self._listeners):
            await listener(email)

    async def _establish(self, body: dict[str, Any]) -> AuthSession:
        session = session_from_token_response(body)
        if self._email_gate is not None and not self._email_gate(session.email):
            logger.warning("Rejected non-campus sign-in for domain=%s", extract_domain(session.email))
            await self._revoke(session.access_token)
            raise DomainNotAllowedError(extract_domain(session.email))
        self._session = session
        self._storage.set_item(REFRESH_TOKEN_KEY, session.refresh_token)
        await self._emit(session.email)
        return session

    async def _drop_session(self) -> None:
        had_session = self._session is not None
        self._session = None
        self._storage.remove_item(REFRESH_TOKEN_KEY)
        if had_session:
            await self._emit(None)

    # -----------------------------------------------------------------------
    # Session queries
    # -----------------------------------------------------------------------

    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    async def get_session(self) -> AuthSession | None:
        """Current session, refreshed when expired; None (plus an event) when that fails."""
        if self._session is not None and not is_expired(self._session):
            return self._session

        refresh_token = (
            self._session.refresh_token if self._session else self._storage.get_item(REFRESH_TOKEN_KEY)
        )
        if refresh_token is None:
            return None

        try:
            body = await self._post("/token", {"refresh_token": refresh_token}, grant_type="refresh_token")
            if self._session is not None:
                # same user, new tokens: no session-changed event
                self._session = session_from_token_response(body)
                self._storage.set_item(REFRESH_TOKEN_KEY, self._session.refresh_token)
                return self._session
            return await self._establish(body)
        except (InvalidCredentialsError, DomainNotAllowedError) as exc:
            logger.info("Session expired and could not be refreshed: %s", exc.message)
            await self._drop_session()
            return None

    # -----------------------------------------------------------------------
    # Sign-in flows
    # -----------------------------------------------------------------------

    async def sign_up(self, email: str, password: str) -> AuthSession | None:
        body = await self._post(
            "/signup",
            {"email": email, "password": password},
            redirect_to=self._redirect_url,
        )
        if "access_token" not in body:
            logger.info("Sign-up pending email confirmation")
            return None
        return await self._establish(body)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        body = await self._post(
            "/token", {"email": email, "password": password}, grant_type="password"
        )
        return await self._establish(body)

    def sign_in_with_oauth(self, provider: str, domain_hint: str) -> str:
        verifier, challenge = _pkce_pair()
        self._storage.set_item(CODE_VERIFIER_KEY, verifier)
        query = urlencode({
            "provider": provider,
            "redirect_to": self._redirect_url,
            "code_challenge": challenge,
            "code_challenge_method": "s256",
            "hd": domain_hint,
        })
        return f"{self._client.base_url}{_AUTH_PATH.lstrip('/')}/authorize?{query}"

    async def send_magic_link(self, email: str) -> None:
        verifier, challenge = _pkce_pair()
        self._storage.set_item(CODE_VERIFIER_KEY, verifier)
        await self._post(
            "/otp",
            {
                "email": email,
                "create_user": True,
                "code_challenge": challenge,
                "code_challenge_method": "s256",
            },
            redirect_to=self._redirect_url,
        )

    async def exchange_code(self, code: str) -> AuthSession:
        verifier = self._storage.get_item(CODE_VERIFIER_KEY)
        if verifier is None:
            raise OAuthError("no sign-in is in progress")
        try:
            body = await self._post(
                "/token", {"auth_code": code, "code_verifier": verifier}, grant_type="pkce"
            )
        except InvalidCredentialsError as exc:
            raise OAuthError(exc.message) from exc
        finally:
            self._storage.remove_item(CODE_VERIFIER_KEY)
        return await self._establish(body)

    async def sign_out(self) -> None:
        """Local sign-out always happens; the remote revoke is best-effort."""
        if self._session is not None:
            await self._revoke(self._session.access_token)
        await self._drop_session()

    # -----------------------------------------------------------------------
    # HTTP
    # -----------------------------------------------------------------------

    async def _revoke(self, access_token: str) -> None:
        try:
            response = await self._client.post(
                f"{_AUTH_PATH}/logout", headers=bearer(access_token)
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Remote sign-out failed: %s", exc)

    async def _post(
        self, path: str, payload: dict[str, Any], **query: str
    ) -> dict[str, Any]:
        try:
            response = await self._client.post(
                f"{_AUTH_PATH}{path}", json=payload, params=query or None
            )
        except httpx.HTTPError as exc:
            raise AuthUnavailableError(str(exc)) from exc

        if response.status_code in (400, 401, 403, 422):
            raise InvalidCredentialsError(_error_message(response))
        if response.is_error:
            raise AuthUnavailableError(_error_message(response))
        if not response.content:
            return {}
        return response.json()
