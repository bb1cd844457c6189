"""cm_catalog REST endpoints (campus-scoped; all require a session).

GET   /listings                       — filtered cards for the session's campus
POST  /listings                       — list an item
POST  /listings/refresh               — reload from the row API
PATCH /listings/{listing_id}/sold     — seller-only sold/available toggle
GET   /listings/{listing_id}/contact  — redirect to the seller's WhatsApp chat
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from src.bootstrap import AppContainer
from src.cm_catalog.application.schemas import SoldUpdateRequest
from src.cm_catalog.domain.filters import FilterConfig
from src.cm_common.enums import ALL
from src.cm_common.response import ApiResponse
from src.cm_gateway.auth.dependencies import get_container, get_current_session
from src.cm_gateway.middleware.request_log import respond
from src.cm_gateway.session.state import Session

router = APIRouter(prefix="/listings", tags=["listings"])

Container = Annotated[AppContainer, Depends(get_container)]
CurrentSession = Annotated[Session, Depends(get_current_session)]


@router.get("")
async def list_listings(
    request: Request,
    session: CurrentSession,
    container: Container,
    search: str = Query("", description="Case-insensitive match on title or description"),
    category: str = Query(ALL),
    price_range: str = Query(ALL),
) -> ApiResponse:
    config = FilterConfig(search_text=search, category=category, price_range=price_range)
    result = container.catalog.browse(session.campus, session.email, config)
    resp = respond(request, result.model_dump())
    if container.controller.last_load_error is not None:
        resp.message = container.controller.last_load_error.message
    return resp


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_listing(
    request: Request,
    body: dict[str, Any],
    session: CurrentSession,
    container: Container,
) -> ApiResponse:
    # raw dict: field errors are reported as ValidationError, not FastAPI's 422 body
    card = await container.catalog.list_item(session.email, body)
    return respond(
        request,
        card.model_dump(),
        "Your item has been listed on Campus Mart and is now visible to other students.",
    )


@router.post("/refresh")
async def refresh_listings(
    request: Request,
    session: CurrentSession,
    container: Container,
) -> ApiResponse:
    await container.controller.reload(raise_errors=True)
    result = container.catalog.browse(session.campus, session.email, FilterConfig())
    return respond(request, result.model_dump())


@router.patch("/{listing_id}/sold")
async def update_sold(
    listing_id: str,
    request: Request,
    body: SoldUpdateRequest,
    session: CurrentSession,
    container: Container,
) -> ApiResponse:
    card = await container.catalog.set_sold(session.email, listing_id, body.sold)
    return respond(request, card.model_dump(), f"Item marked as {'sold' if body.sold else 'available'}.")


@router.get("/{listing_id}/contact")
async def contact_seller(
    listing_id: str,
    session: CurrentSession,
    container: Container,
) -> RedirectResponse:
    return RedirectResponse(container.catalog.contact_url(listing_id), status_code=status.HTTP_302_FOUND)
