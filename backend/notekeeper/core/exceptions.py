"""
Custom exception classes for unified error handling.

`message` is safe to show to the user. Diagnostic detail (raw responses,
OS errors) belongs in the logs, never in these fields.
"""

from fastapi import HTTPException


class AppBaseError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ConfigurationError(AppBaseError):
    """Raised at startup when a required setting is missing."""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            detail="Set the variable in the environment or in the .env file.",
        )


class StorageReadError(AppBaseError):
    """Raised when the stored note blob cannot be read or parsed."""
    def __init__(self, message: str = "Failed to load notes"):
        super().__init__(message=message, detail="Stored notes could not be read.")


class StorageWriteError(AppBaseError):
    """Raised when writing to local storage fails."""
    def __init__(self, message: str = "Failed to save notes"):
        super().__init__(message=message, detail="Please try again.")


class NoteNotFoundError(AppBaseError):
    """Raised by delete/update/get when no note has the given id."""
    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(
            message="Note not found",
            detail=f"No note with id '{note_id}'.",
        )


class DuplicateNoteError(AppBaseError):
    """Raised when saving a note whose id is already stored."""
    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(
            message="Note already exists",
            detail=f"A note with id '{note_id}' is already stored.",
        )


class RemoteCallError(AppBaseError):
    """Raised when the text-assist service fails or answers garbage."""
    def __init__(self, message: str = "Text assist request failed"):
        super().__init__(message=message, detail="Please try again later.")


class AuthError(AppBaseError):
    """Raised when the identity service rejects a request or no session exists."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, detail="Please sign in again.")


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError, status_code: int = 400) -> HTTPException:
    """Convert an AppBaseError to an HTTPException with consistent JSON body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error.message,
            "detail": error.detail,
            "type": type(error).__name__,
        },
    )
