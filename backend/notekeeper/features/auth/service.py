"""
Auth feature: profile rows stored in the Supabase `profiles` table.
"""

from datetime import datetime, timezone

from supabase import Client

from notekeeper.features.auth.schemas import ProfileResponse

PROFILE_FIELDS = ("username", "website", "avatar_url")


def _to_profile(user_id: str, row: dict) -> ProfileResponse:
    return ProfileResponse(id=user_id, **{k: row.get(k) for k in PROFILE_FIELDS})


class ProfileService:
    """Reads and upserts the signed-in user's profile."""

    def __init__(self, db: Client):
        self.db = db

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Profile for user_id; an empty profile if the row does not exist yet."""
        result = (
            self.db.table("profiles")
            .select(", ".join(PROFILE_FIELDS))
            .eq("id", user_id)
            .execute()
        )
        return _to_profile(user_id, result.data[0] if result.data else {})

    def update_profile(self, user_id: str, data: dict) -> ProfileResponse:
        """Upsert profile fields. None values leave the stored field alone."""
        update_data = {k: v for k, v in data.items() if v is not None}
        if not update_data:
            return self.get_profile(user_id)

        row = {
            "id": user_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            **update_data,
        }
        result = self.db.table("profiles").upsert(row).execute()
        return _to_profile(user_id, result.data[0] if result.data else row)
