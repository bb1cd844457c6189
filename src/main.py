"""FastAPI application entry point for the local Campus Mart client.

Run with: python -m src.main   (or: uvicorn src.main:app --loop uvloop --port 8000)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bootstrap import AppContainer, build_hosted_container
from src.cm_catalog.api.router import router as listings_router
from src.cm_common.errors import AppError, UnexpectedError, ValidationError
from src.cm_common.logging_config import configure_logging
from src.cm_common.response import error_response
from src.cm_common.supabase_client import close_http_client, get_http_client
from src.cm_gateway.api.router import router as auth_router
from src.cm_gateway.middleware.request_log import RequestLogMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: wire the hosted backend and restore any session. Shutdown: tear down."""
    # Startup
    if getattr(app.state, "container", None) is None:
        app.state.container = build_hosted_container(await get_http_client())
    container: AppContainer = app.state.container
    await container.controller.start()
    yield
    # Shutdown
    await container.controller.stop()
    await close_http_client()


def _error_json(exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(exc, "field", None))
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


def create_app(container: AppContainer | None = None) -> FastAPI:
    """Build the app; tests pass a container wired to in-memory fakes."""
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_json(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        first = exc.errors()[0]
        loc = [str(part) for part in first.get("loc", ()) if part != "body"]
        return _error_json(ValidationError(loc[-1] if loc else "request", first.get("msg", "Invalid input")))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_json(UnexpectedError())

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(listings_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": "0.1.0"}

    return app


configure_logging(settings.DEBUG)
app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000, loop="uvloop")


if __name__ == "__main__":
    run()
