"""
Profile service for creating and updating tenant profiles.
Applies partial updates, default values and free-text sanitization.
"""

from typing import Optional
import logging
import uuid

from rental_trust.models.profile import Profile, Pet
from rental_trust.schemas.profile import ProfileUpdate
from rental_trust.utils.exceptions import ValidationError, ForbiddenError
from rental_trust.utils.sanitize import sanitize_user_input

logger = logging.getLogger(__name__)

# Fields holding user-written text
FREE_TEXT_FIELDS = ("name", "bio", "intro")

REQUIRED_ON_CREATE = ("name", "age_range", "family_type")


class ProfileService:
    """
    Profile upsert rules.
    A first save creates the profile; later saves only touch the fields provided.
    """

    def save(
        self,
        user_id: uuid.UUID,
        update: ProfileUpdate,
        existing: Optional[Profile] = None
    ) -> Profile:
        """
        Create or update a tenant profile.

        Args:
            user_id: Owner of the profile
            update: Validated payload; None fields are left as stored
            existing: The stored profile, if one exists

        Returns:
            The new or updated profile

        Raises:
            ForbiddenError: If existing belongs to another user
            ValidationError: If a new profile is missing required fields
        """
        changes = self._clean(update)

        if existing is None:
            missing = [field for field in REQUIRED_ON_CREATE if not changes.get(field)]
            if missing:
                raise ValidationError(f"Missing required profile fields: {', '.join(missing)}")

            profile = Profile(
                user_id=user_id,
                name=changes["name"],
                age_range=changes["age_range"],
                family_type=changes["family_type"],
                pets=changes.get("pets") or [Pet.NONE],
                smoking=changes.get("smoking") or False,
                stay_time=changes.get("stay_time"),
                duration=changes.get("duration"),
                noise_level=changes.get("noise_level"),
                bio=changes.get("bio"),
                intro=changes.get("intro"),
                is_complete=changes.get("is_complete") or False,
            )
            logger.info(f"Profile created for user {user_id}")
            return profile

        if existing.user_id != user_id:
            raise ForbiddenError("You can only edit your own profile")

        if not changes:
            return existing

        logger.info(f"Profile updated for user {user_id}: {sorted(changes)}")
        return existing.touch(**changes)

    @staticmethod
    def _clean(update: ProfileUpdate) -> dict:
        """Drop unset fields and sanitize free text."""
        changes = update.model_dump(exclude_none=True)

        for field in FREE_TEXT_FIELDS:
            if field in changes:
                changes[field] = sanitize_user_input(changes[field])

        # A name that sanitizes down to nothing is treated as not provided
        if changes.get("name") == "":
            del changes["name"]

        return changes
