"""SessionController — the single subscription point to auth events.

  signed in  -> local-storage userEmail set, store.load(campus)
  signed out -> local-storage userEmail removed, store.clear()

A failed load does not undo the sign-in: the session stays authenticated
with an empty catalog and `last_load_error` set until a manual refresh.
"""

import logging
from collections.abc import Callable

from src.cm_catalog.application.store import ListingStore
from src.cm_common.errors import AppError, ListingLoadError, NotAuthenticatedError
from src.cm_gateway.auth.local_storage import USER_EMAIL_KEY, LocalStorage
from src.cm_gateway.auth.provider import AuthProviderProtocol
from src.cm_gateway.session.state import Session, SessionState

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        provider: AuthProviderProtocol,
        store: ListingStore,
        storage: LocalStorage,
        state: SessionState | None = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._storage = storage
        self.state = state or SessionState()
        self.last_load_error: ListingLoadError | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def session(self) -> Session | None:
        return self.state.current

    def require_session(self) -> Session:
        if self.state.current is None:
            raise NotAuthenticatedError()
        return self.state.current

    async def start(self) -> None:
        """Subscribe to auth events, then apply whatever session the provider already has."""
        if self._unsubscribe is None:
            self._unsubscribe = self._provider.on_auth_state_change(self.handle_auth_event)
        try:
            auth_session = await self._provider.get_session()
        except AppError as exc:
            logger.warning("Could not restore previous session: %s", exc.message)
            return
        if auth_session is not None:
            await self.handle_auth_event(auth_session.email)

    async def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._store.close()

    async def sync(self) -> Session | None:
        """Let the provider notice an expired session before serving a request."""
        if self.state.current is not None:
            await self._provider.get_session()
        return self.state.current

    async def handle_auth_event(self, email: str | None) -> None:
        result = self.state.apply(email)
        if not result.changed:
            return

        if result.current is None:
            self._storage.remove_item(USER_EMAIL_KEY)
            self._store.clear()
            self.last_load_error = None
            logger.info("Signed out")
            return

        self._storage.set_item(USER_EMAIL_KEY, result.current.email)
        logger.info("Signed in: campus=%s", result.current.campus)
        await self.reload()

    async def reload(self, raise_errors: bool = False) -> None:
        session = self.require_session()
        try:
            await self._store.load(session.campus)
        except ListingLoadError as exc:
            self.last_load_error = exc
            if raise_errors:
                raise
            return
        self.last_load_error = None
