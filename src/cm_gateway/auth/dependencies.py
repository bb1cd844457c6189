"""FastAPI dependencies: the app container and the current session.

Usage in any protected router:
    from src.cm_gateway.auth.dependencies import get_current_session

    @router.get("/protected")
    async def protected(session: Session = Depends(get_current_session)):
        ...
"""

from fastapi import Depends, Request

from src.bootstrap import AppContainer
from src.cm_common.errors import NotAuthenticatedError
from src.cm_gateway.session.state import Session


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def get_optional_session(
    container: AppContainer = Depends(get_container),
) -> Session | None:
    """Current session after giving the provider a chance to expire it."""
    return await container.controller.sync()


async def get_current_session(
    session: Session | None = Depends(get_optional_session),
) -> Session:
    """Raises NotAuthenticatedError (2004) when nobody is signed in."""
    if session is None:
        raise NotAuthenticatedError()
    return session
