"""User profile kept in on-device storage."""

import json
import logging

from savorist.client.storage import KeyValueStore
from savorist.errors import CacheReadError, CacheWriteError
from savorist.models import Profile
from savorist.models.profile import DEFAULT_DISPLAY_NAME

logger = logging.getLogger(__name__)

# Storage key; must stay stable across releases
PROFILE_KEY = "savorist_profile"


class ProfileStore:
    """Loads and saves the profile record.

    Missing, corrupt or partial records fall back to defaults field by field.
    """

    def __init__(self, storage: KeyValueStore) -> None:
        self.storage = storage

    async def load_profile(self) -> Profile:
        try:
            raw = await self.storage.get_item(PROFILE_KEY)
        except CacheReadError as e:
            logger.warning(f"Failed to load profile: {e}")
            return Profile()

        if raw is None:
            return Profile()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored profile is not valid JSON - using defaults")
            return Profile()

        if not isinstance(data, dict):
            logger.warning("Stored profile is not an object - using defaults")
            return Profile()

        display_name = data.get("displayName")
        notifications = data.get("notificationsEnabled")
        return Profile(
            display_name=(
                display_name
                if isinstance(display_name, str) and display_name
                else DEFAULT_DISPLAY_NAME
            ),
            notifications_enabled=(
                notifications if isinstance(notifications, bool) else True
            ),
        )

    async def save_profile(self, profile: Profile) -> None:
        try:
            await self.storage.set_item(
                PROFILE_KEY, profile.model_dump_json(by_alias=True)
            )
        except CacheWriteError:
            logger.error("Failed to save profile", exc_info=True)

    async def update_profile(
        self,
        display_name: str | None = None,
        notifications_enabled: bool | None = None,
    ) -> Profile:
        """Change the given profile fields and persist the result.

        Args:
            display_name: New display name, or None to keep the current one
            notifications_enabled: New notification setting, or None to keep it

        Returns:
            The profile as saved
        """
        updates: dict = {}
        if display_name is not None:
            updates["display_name"] = display_name.strip() or DEFAULT_DISPLAY_NAME
        if notifications_enabled is not None:
            updates["notifications_enabled"] = notifications_enabled

        profile = (await self.load_profile()).model_copy(update=updates)
        await self.save_profile(profile)
        return profile
