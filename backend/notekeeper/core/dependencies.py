"""
FastAPI dependency injection functions.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from notekeeper.config import get_settings
from notekeeper.core.database import get_supabase_client
from notekeeper.core.exceptions import AuthError
from notekeeper.core.storage import FileKeyValueStorage, KeyValueStorage
from notekeeper.features.assist.client import TextAssistClient
from notekeeper.features.auth.client import IdentityClient
from notekeeper.features.notes.store import NoteStore

# Bearer token scheme for Swagger UI
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Client:
    """Dependency: get Supabase client."""
    return get_supabase_client()


@lru_cache
def get_storage() -> KeyValueStorage:
    """Dependency: device-local key-value storage."""
    return FileKeyValueStorage(get_settings().NOTES_STORAGE_DIR)


def get_note_store(storage: KeyValueStorage = Depends(get_storage)) -> NoteStore:
    """Dependency: note store bound to the configured storage key."""
    return NoteStore(storage, key=get_settings().NOTES_STORAGE_KEY)


def get_identity_client(db: Client = Depends(get_db)) -> IdentityClient:
    return IdentityClient(db)


def get_text_assist_client() -> TextAssistClient:
    """Dependency: text-assist client configured from settings."""
    return TextAssistClient.from_settings(get_settings())


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityClient = Depends(get_identity_client),
) -> str:
    """Dependency: the session gate.

    Returns:
        str: The signed-in user's id.

    Raises:
        HTTPException 401: If there is no bearer token or it is not a live session.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user = identity.get_user(credentials.credentials)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return str(user.id)
