"""Auth/session API router.

GET  /session                 — who is signed in, and which campus
POST /auth/signup             — college-email registration
POST /auth/login              — email + password
POST /auth/magic-link         — email a sign-in link
GET  /auth/oauth/{provider}   — redirect to the OAuth provider
GET  /auth/callback           — OAuth / magic-link landing
POST /auth/logout

All JSON endpoints return ApiResponse. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from src.bootstrap import AppContainer
from src.cm_common.response import ApiResponse
from src.cm_gateway.auth.dependencies import get_container, get_optional_session
from src.cm_gateway.middleware.request_log import respond
from src.cm_gateway.session.state import Session
from src.cm_gateway.user.schemas import (
    LoginRequest,
    MagicLinkRequest,
    SessionInfo,
    SignUpRequest,
    SignUpResponse,
)

router = APIRouter(tags=["auth"])

Container = Annotated[AppContainer, Depends(get_container)]


@router.get("/session", response_model=ApiResponse, summary="Current session")
async def get_session(
    request: Request,
    session: Annotated[Session | None, Depends(get_optional_session)],
) -> ApiResponse:
    return respond(request, SessionInfo.from_session(session).model_dump())


@router.post(
    "/auth/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Sign up with a college email",
)
async def sign_up(request: Request, body: SignUpRequest, container: Container) -> ApiResponse:
    confirmation_required = await container.auth.sign_up(body.email, body.password)
    data = SignUpResponse(email=body.email.strip(), confirmation_required=confirmation_required)
    message = (
        "Check your inbox to confirm your email"
        if confirmation_required
        else "Welcome to Campus Mart! You can now view items from your campus."
    )
    return respond(request, data.model_dump(), message)


@router.post("/auth/login", response_model=ApiResponse, summary="Login")
async def login(request: Request, body: LoginRequest, container: Container) -> ApiResponse:
    await container.auth.sign_in_with_password(body.email, body.password)
    data = SessionInfo.from_session(container.controller.session)
    return respond(request, data.model_dump(), "Login successful")


@router.post("/auth/magic-link", response_model=ApiResponse, summary="Email a sign-in link")
async def magic_link(request: Request, body: MagicLinkRequest, container: Container) -> ApiResponse:
    await container.auth.send_magic_link(body.email)
    return respond(request, None, "Check your inbox for a sign-in link")


@router.get("/auth/oauth/{provider}", summary="Start OAuth sign-in")
async def oauth(provider: str, container: Container) -> RedirectResponse:
    return RedirectResponse(container.auth.oauth_url(provider), status_code=status.HTTP_302_FOUND)


@router.get("/auth/callback", response_model=ApiResponse, summary="OAuth / magic-link callback")
async def callback(
    request: Request,
    container: Container,
    code: str = Query(""),
) -> ApiResponse:
    await container.auth.complete_sign_in(code)
    data = SessionInfo.from_session(container.controller.session)
    return respond(request, data.model_dump(), "Login successful")


@router.post("/auth/logout", response_model=ApiResponse, summary="Sign out")
async def logout(request: Request, container: Container) -> ApiResponse:
    await container.auth.sign_out()
    return respond(request, SessionInfo(authenticated=False).model_dump(), "Signed out")
