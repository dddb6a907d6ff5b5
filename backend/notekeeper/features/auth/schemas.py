"""
Auth feature: Pydantic schemas for request/response models.
"""

from pydantic import BaseModel, EmailStr


# ── Requests ─────────────────────────────────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str


class UpdateProfileRequest(BaseModel):
    username: str | None = None
    website: str | None = None
    avatar_url: str | None = None


# ── Responses ────────────────────────────────────────────
class SessionResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user_id: str
    email: str | None = None

    @classmethod
    def from_session(cls, session) -> "SessionResponse":
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            token_type=session.token_type or "bearer",
            expires_in=session.expires_in,
            user_id=str(session.user.id),
            email=session.user.email,
        )


class RegisterResponse(BaseModel):
    session: SessionResponse | None = None
    message: str


class ProfileResponse(BaseModel):
    id: str
    username: str | None = None
    website: str | None = None
    avatar_url: str | None = None


class OAuthResponse(BaseModel):
    provider: str
    url: str


class MessageResponse(BaseModel):
    message: str
