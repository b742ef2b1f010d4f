"""
Favorite service: landlords bookmarking tenant profiles with an optional note.
"""

from typing import Iterable, Mapping, Optional, Tuple
import logging
import uuid

from rental_trust.models.favorite import TenantFavorite
from rental_trust.models.profile import Profile
from rental_trust.models.user import User
from rental_trust.schemas.common import paginate
from rental_trust.schemas.favorite import FavoriteCreate, FavoriteEntry, FavoritePage, FavoriteCheck
from rental_trust.utils.dependencies import require_landlord, require_user
from rental_trust.utils.exceptions import BadRequestError, NotFoundError
from rental_trust.utils.sanitize import sanitize_user_input
from rental_trust.utils.validators import ValidationUtils

logger = logging.getLogger(__name__)


class FavoriteService:
    """Landlord-side tenant bookmarks. One favorite per landlord and tenant."""

    def add(
        self,
        landlord: Optional[User],
        tenant: Optional[User],
        data: FavoriteCreate,
        existing: Iterable[TenantFavorite] = ()
    ) -> Tuple[TenantFavorite, bool]:
        """
        Favorite a tenant, or update the note of an existing favorite.

        Args:
            landlord: The requesting user; must be a landlord
            tenant: The user found for data.tenant_id, or None
            data: Tenant id and optional note
            existing: The landlord's stored favorites

        Returns:
            (favorite, created) where created is False when it already existed

        Raises:
            BadRequestError: If the target is the landlord or not a tenant
            NotFoundError: If the tenant does not exist
        """
        landlord = require_landlord(landlord, "favorite a tenant")

        if data.tenant_id == landlord.id:
            raise BadRequestError("You cannot favorite yourself")
        if tenant is None:
            raise NotFoundError("Tenant", str(data.tenant_id))
        if not tenant.is_tenant:
            raise BadRequestError("Only tenants can be added to favorites")

        note = sanitize_user_input(data.note) or None

        current = self._find(landlord.id, tenant.id, existing)
        if current is not None:
            # Only an explicitly sent note replaces the stored one
            if "note" in data.model_fields_set:
                current = current.touch(note=note)
            return current, False

        favorite = TenantFavorite(landlord_id=landlord.id, tenant_id=tenant.id, note=note)
        logger.info(f"Landlord {landlord.id} favorited tenant {tenant.id}")
        return favorite, True

    def remove(
        self,
        landlord: Optional[User],
        tenant_id: uuid.UUID,
        existing: Iterable[TenantFavorite]
    ) -> TenantFavorite:
        """
        Find the favorite to delete.

        Raises:
            NotFoundError: If the landlord has not favorited this tenant
        """
        landlord = require_landlord(landlord, "remove a favorite")

        favorite = self._find(landlord.id, tenant_id, existing)
        if favorite is None:
            raise NotFoundError("Favorite")

        logger.info(f"Landlord {landlord.id} removed favorite tenant {tenant_id}")
        return favorite

    def list_favorites(
        self,
        landlord: Optional[User],
        favorites: Iterable[TenantFavorite],
        profiles: Mapping[uuid.UUID, Profile],
        page: int = 1,
        limit: int = 20
    ) -> FavoritePage:
        """
        The landlord's favorites with tenant profiles, newest first.
        Favorites whose tenant has no profile are left out.
        """
        landlord = require_landlord(landlord, "list favorites")
        page, limit = ValidationUtils.validate_pagination(page, limit)

        entries = [
            FavoriteEntry(favorite=favorite, profile=profiles[favorite.tenant_id])
            for favorite in sorted(favorites, key=lambda favorite: favorite.created_at, reverse=True)
            if favorite.landlord_id == landlord.id and favorite.tenant_id in profiles
        ]

        page_items, pagination = paginate(entries, page, limit)
        return FavoritePage(favorites=page_items, pagination=pagination)

    def check(
        self,
        user: Optional[User],
        tenant_id: uuid.UUID,
        favorites: Iterable[TenantFavorite]
    ) -> FavoriteCheck:
        """Whether the user has favorited the tenant. Always False for tenants."""
        user = require_user(user)
        if not user.is_landlord:
            return FavoriteCheck(is_favorited=False)

        favorite = self._find(user.id, tenant_id, favorites)
        if favorite is None:
            return FavoriteCheck(is_favorited=False)
        return FavoriteCheck(is_favorited=True, favorite_id=favorite.id, note=favorite.note)

    @staticmethod
    def _find(
        landlord_id: uuid.UUID,
        tenant_id: uuid.UUID,
        favorites: Iterable[TenantFavorite]
    ) -> Optional[TenantFavorite]:
        return next(
            (
                favorite for favorite in favorites
                if favorite.landlord_id == landlord_id and favorite.tenant_id == tenant_id
            ),
            None
        )
