"""Session State — Unauthenticated | Authenticated(email, campus).

`transition` is the only place a Session is derived; domain and campus are
always computed from the email, never set on their own.
"""

from collections.abc import Callable
from dataclasses import dataclass

from src.cm_campus.domain.resolver import (
    campus_full_name,
    extract_domain,
    format_campus_display,
    resolve_campus,
)


@dataclass(frozen=True)
class Session:
    email: str
    domain: str
    campus: str

    @classmethod
    def from_email(cls, email: str) -> "Session | None":
        domain = extract_domain(email)
        campus = resolve_campus(email)
        if domain is None or campus is None:
            return None
        return cls(email=email.strip(), domain=domain, campus=campus)

    @property
    def campus_display(self) -> str:
        return format_campus_display(self.domain)

    @property
    def campus_name(self) -> str:
        return campus_full_name(self.domain)


def transition(current: Session | None, email: str | None) -> Session | None:
    """Next session for an auth event carrying `email` (None = signed out).

    An event for the already-active email returns `current` itself, so callers
    can detect "no change" with an identity check.
    """
    if email is None:
        return None
    if current is not None and current.email.lower() == email.strip().lower():
        return current
    return Session.from_email(email)


@dataclass(frozen=True)
class SessionTransition:
    previous: Session | None
    current: Session | None

    @property
    def changed(self) -> bool:
        return self.previous is not self.current

    @property
    def signed_in(self) -> bool:
        return self.changed and self.current is not None

    @property
    def signed_out(self) -> bool:
        return self.changed and self.current is None


SessionListener = Callable[[SessionTransition], None]


class SessionState:
    """Explicit state container; mutated only through `apply`."""

    def __init__(self) -> None:
        self._current: Session | None = None
        self._listeners: list[SessionListener] = []

    @property
    def current(self) -> Session | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def apply(self, email: str | None) -> SessionTransition:
        result = SessionTransition(self._current, transition(self._current, email))
        self._current = result.current
        if result.changed:
            for listener in list(self._listeners):
                listener(result)
        return result
