"""Auth collaborator Protocol.

The hosted auth service owns credentials and sessions. This client only
sees the resulting AuthSession and a stream of session-changed events
carrying the signed-in email, or None after sign-out/expiry.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

AuthListener = Callable[[str | None], Awaitable[None]]


@dataclass(frozen=True)
class AuthSession:
    email: str
    access_token: str
    refresh_token: str
    expires_at: datetime


class AuthProviderProtocol(Protocol):
    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe; returns the unsubscribe callable."""
        ...

    def access_token(self) -> str | None: ...

    async def get_session(self) -> AuthSession | None: ...

    async def sign_up(self, email: str, password: str) -> AuthSession | None:
        """None when the provider wants the email confirmed first."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession: ...

    def sign_in_with_oauth(self, provider: str, domain_hint: str) -> str:
        """Authorize URL to redirect the browser to."""
        ...

    async def send_magic_link(self, email: str) -> None: ...

    async def exchange_code(self, code: str) -> AuthSession: ...

    async def sign_out(self) -> None: ...
