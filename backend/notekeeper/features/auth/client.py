"""
Auth feature: thin wrapper over Supabase Auth.

Sign-in, sign-up, OAuth redirects, token refresh and session storage all
happen inside Supabase. The rest of the app only asks one question: is
there a session or not.
"""

import logging
from collections.abc import Callable

from supabase import AuthError as SupabaseAuthError
from supabase import Client

from notekeeper.core.exceptions import AuthError

logger = logging.getLogger(__name__)

OAUTH_PROVIDERS = ("google", "github", "apple")


class IdentityClient:
    """Session gate backed by a Supabase client."""

    def __init__(self, db: Client):
        self.db = db

    def sign_in(self, email: str, password: str):
        """Email + password sign-in. Returns the new Supabase session."""
        try:
            response = self.db.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except SupabaseAuthError as e:
            logger.info("Sign-in rejected for %s: %s", email, e)
            raise AuthError("Invalid email or password") from e
        if response.session is None:
            raise AuthError("Invalid email or password")
        return response.session

    def sign_up(self, email: str, password: str):
        """Register a new account.

        Returns the session, or None when the account still needs email
        verification before it can sign in.
        """
        try:
            response = self.db.auth.sign_up({"email": email, "password": password})
        except SupabaseAuthError as e:
            logger.info("Sign-up rejected for %s: %s", email, e)
            raise AuthError(f"Sign-up failed: {e}") from e
        return response.session

    def oauth_url(self, provider: str, redirect_to: str) -> str:
        """URL the client opens to start an OAuth flow with the provider."""
        if provider not in OAUTH_PROVIDERS:
            raise ValueError(
                f"Unsupported provider: '{provider}'. "
                f"Supported: {', '.join(OAUTH_PROVIDERS)}"
            )
        try:
            response = self.db.auth.sign_in_with_oauth(
                {"provider": provider, "options": {"redirect_to": redirect_to}}
            )
        except SupabaseAuthError as e:
            logger.error("OAuth start failed for %s: %s", provider, e)
            raise AuthError(f"Failed to sign in with {provider}") from e
        return response.url

    def get_session(self):
        """Current session, or None when signed out."""
        try:
            return self.db.auth.get_session()
        except SupabaseAuthError as e:
            logger.warning("Session lookup failed: %s", e)
            return None

    def get_user(self, access_token: str):
        """Resolve an access token to its user.

        Raises:
            AuthError: If the token is invalid, expired or revoked.
        """
        try:
            response = self.db.auth.get_user(access_token)
        except SupabaseAuthError as e:
            logger.info("Rejected access token: %s", e)
            raise AuthError("Invalid or expired session") from e
        if response is None or response.user is None:
            raise AuthError("Invalid or expired session")
        return response.user

    def on_session_change(self, callback: Callable) -> object:
        """Call `callback(session_or_none)` whenever the session changes.

        Returns the Supabase subscription; call `.unsubscribe()` on it to stop.
        """
        def _listener(event, session):
            logger.debug("Auth event: %s", event)
            callback(session)

        return self.db.auth.on_auth_state_change(_listener)

    def sign_out(self) -> None:
        try:
            self.db.auth.sign_out()
        except SupabaseAuthError as e:
            logger.warning("Sign-out failed: %s", e)
            raise AuthError("Failed to sign out") from e
