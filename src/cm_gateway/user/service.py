"""Auth service: sign-up, sign-in, magic link, OAuth, sign-out.

Input checks (email shape, the college-domain gate for new accounts) run here
and never reach the auth collaborator when they fail. Session state changes
arrive separately through the collaborator's event stream.
"""

import logging

from src.cm_campus.domain.institutions import is_allowed_signup_domain
from src.cm_campus.domain.resolver import extract_domain
from src.cm_common.errors import DomainNotAllowedError, ValidationError
from src.cm_gateway.auth.provider import AuthProviderProtocol

logger = logging.getLogger(__name__)

OAUTH_PROVIDERS = ("google", "azure")


def _require_email(email: str) -> str:
    email = email.strip()
    if not email:
        raise ValidationError("email", "Please enter your email address")
    if extract_domain(email) is None:
        raise ValidationError("email", "Please enter a valid email address")
    return email


def _require_campus_email(email: str) -> str:
    email = _require_email(email)
    domain = extract_domain(email)
    if not is_allowed_signup_domain(domain):
        raise DomainNotAllowedError(domain)
    return email


def _require_password(password: str) -> str:
    if not password:
        raise ValidationError("password", "Please enter your password")
    return password


class AuthService:
    def __init__(self, provider: AuthProviderProtocol, oauth_domain_hint: str = "*") -> None:
        self._provider = provider
        self._oauth_domain_hint = oauth_domain_hint

    async def sign_up(self, email: str, password: str) -> bool:
        """Register a college email. Returns True when the account still needs confirming."""
        email = _require_campus_email(email)
        session = await self._provider.sign_up(email, _require_password(password))
        logger.info("Sign-up for domain=%s confirmed=%s", extract_domain(email), session is not None)
        return session is None

    async def sign_in_with_password(self, email: str, password: str) -> str:
        email = _require_email(email)
        session = await self._provider.sign_in_with_password(email, _require_password(password))
        return session.email

    async def send_magic_link(self, email: str) -> None:
        # magic links create accounts on first use, so they pass the sign-up gate
        email = _require_campus_email(email)
        await self._provider.send_magic_link(email)
        logger.info("Magic link sent to domain=%s", extract_domain(email))

    def oauth_url(self, provider: str) -> str:
        if provider not in OAUTH_PROVIDERS:
            raise ValidationError("provider", f"Unsupported sign-in provider: {provider}")
        return self._provider.sign_in_with_oauth(provider, self._oauth_domain_hint)

    async def complete_sign_in(self, code: str) -> str:
        """OAuth / magic-link callback. Non-campus accounts are rejected by the provider's gate."""
        if not code:
            raise ValidationError("code", "Missing sign-in code")
        session = await self._provider.exchange_code(code)
        return session.email

    async def sign_out(self) -> None:
        await self._provider.sign_out()
