"""
Pydantic schemas for landlords' favorite tenants.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
import uuid

from rental_trust.models.favorite import TenantFavorite
from rental_trust.models.profile import Profile
from rental_trust.schemas.common import Pagination, RequestSchema


class FavoriteCreate(RequestSchema):
    tenant_id: uuid.UUID
    note: Optional[str] = Field(None, max_length=200)


class FavoriteEntry(BaseModel):
    favorite: TenantFavorite
    profile: Profile


class FavoritePage(BaseModel):
    favorites: List[FavoriteEntry]
    pagination: Pagination


class FavoriteCheck(BaseModel):
    is_favorited: bool
    favorite_id: Optional[uuid.UUID] = None
    note: Optional[str] = None
