"""Pydantic request/response schemas for cm_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field

from src.cm_gateway.session.state import Session


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class MagicLinkRequest(BaseModel):
    email: str


class SignUpResponse(BaseModel):
    email: str
    confirmation_required: bool


class SessionInfo(BaseModel):
    authenticated: bool
    email: str | None = None
    campus: str | None = None
    campus_display: str | None = None
    campus_name: str | None = None

    @classmethod
    def from_session(cls, session: Session | None) -> "SessionInfo":
        if session is None:
            return cls(authenticated=False)
        return cls(
            authenticated=True,
            email=session.email,
            campus=session.campus,
            campus_display=session.campus_display,
            campus_name=session.campus_name,
        )
