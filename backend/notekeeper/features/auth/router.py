"""
Auth feature: API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from notekeeper.config import get_settings
from notekeeper.core.dependencies import get_current_user_id, get_db, get_identity_client
from notekeeper.core.exceptions import AuthError, app_error_to_http
from notekeeper.features.auth.client import IdentityClient
from notekeeper.features.auth.schemas import (
    LoginRequest,
    MessageResponse,
    OAuthResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    UpdateProfileRequest,
)
from notekeeper.features.auth.service import ProfileService

router = APIRouter()


@router.post("/login", response_model=SessionResponse)
async def login(data: LoginRequest, identity: IdentityClient = Depends(get_identity_client)):
    """Sign in with email and password."""
    try:
        session = identity.sign_in(data.email, data.password)
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_401_UNAUTHORIZED)
    return SessionResponse.from_session(session)


@router.post("/register", response_model=RegisterResponse)
async def register(data: RegisterRequest, identity: IdentityClient = Depends(get_identity_client)):
    """Create an account. May require email verification before sign-in."""
    try:
        session = identity.sign_up(data.email, data.password)
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_400_BAD_REQUEST)

    if session is None:
        return RegisterResponse(message="Please check your inbox for email verification!")
    return RegisterResponse(
        session=SessionResponse.from_session(session),
        message="Account created",
    )


@router.get("/oauth/{provider}", response_model=OAuthResponse)
async def oauth_start(
    provider: str,
    redirect_to: str | None = None,
    identity: IdentityClient = Depends(get_identity_client),
):
    """URL to open for Google, GitHub or Apple sign-in."""
    redirect = redirect_to or get_settings().OAUTH_REDIRECT_URL
    try:
        url = identity.oauth_url(provider, redirect)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_502_BAD_GATEWAY)
    return OAuthResponse(provider=provider, url=url)


@router.get("/session", response_model=SessionResponse)
async def current_session(identity: IdentityClient = Depends(get_identity_client)):
    """The session held by this device, 401 when signed out."""
    session = identity.get_session()
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in")
    return SessionResponse.from_session(session)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    _: str = Depends(get_current_user_id),
    identity: IdentityClient = Depends(get_identity_client),
):
    try:
        identity.sign_out()
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_502_BAD_GATEWAY)
    return MessageResponse(message="Signed out")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Username, website and avatar of the signed-in user."""
    return ProfileService(db).get_profile(user_id)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    return ProfileService(db).update_profile(user_id, data.model_dump())
