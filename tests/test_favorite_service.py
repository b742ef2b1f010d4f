"""
Tests for landlords' favorite tenants.
"""

import uuid

import pytest

from rental_trust.models.user import User, UserType
from rental_trust.schemas.favorite import FavoriteCreate
from rental_trust.services.favorite import FavoriteService
from rental_trust.utils.exceptions import BadRequestError, LandlordOnlyError, NotFoundError
from tests.conftest import FavoriteFactory, ProfileFactory, UserFactory


class TestAddFavorite:

    def test_add_new(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        favorite, created = favorite_service.add(
            landlord_user, tenant_user, FavoriteCreate(tenantId=tenant_user.id, note="<b>깔끔함</b>")
        )

        assert created is True
        assert favorite.landlord_id == landlord_user.id
        assert favorite.tenant_id == tenant_user.id
        assert favorite.note == "깔끔함"

    def test_existing_note_updated(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        existing = FavoriteFactory.create_favorite(landlord_user.id, tenant_user.id, note="old")

        favorite, created = favorite_service.add(
            landlord_user, tenant_user, FavoriteCreate(tenantId=tenant_user.id, note="new"), [existing]
        )

        assert created is False
        assert favorite.id == existing.id
        assert favorite.note == "new"

    def test_existing_note_kept_when_not_sent(
        self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User
    ):
        existing = FavoriteFactory.create_favorite(landlord_user.id, tenant_user.id, note="keep")

        favorite, created = favorite_service.add(
            landlord_user, tenant_user, FavoriteCreate(tenantId=tenant_user.id), [existing]
        )

        assert created is False
        assert favorite.note == "keep"

    def test_tenant_forbidden(self, favorite_service: FavoriteService, tenant_user: User):
        other = UserFactory.create_user()

        with pytest.raises(LandlordOnlyError):
            favorite_service.add(tenant_user, other, FavoriteCreate(tenantId=other.id))

    def test_cannot_favorite_self(self, favorite_service: FavoriteService, landlord_user: User):
        with pytest.raises(BadRequestError):
            favorite_service.add(landlord_user, landlord_user, FavoriteCreate(tenantId=landlord_user.id))

    def test_missing_tenant(self, favorite_service: FavoriteService, landlord_user: User):
        with pytest.raises(NotFoundError):
            favorite_service.add(landlord_user, None, FavoriteCreate(tenantId=uuid.uuid4()))

    def test_landlord_cannot_be_favorited(self, favorite_service: FavoriteService, landlord_user: User):
        other = UserFactory.create_user(user_type=UserType.LANDLORD)

        with pytest.raises(BadRequestError):
            favorite_service.add(landlord_user, other, FavoriteCreate(tenantId=other.id))

    def test_note_too_long(self):
        with pytest.raises(ValueError):
            FavoriteCreate(tenantId=uuid.uuid4(), note="x" * 201)


class TestRemoveFavorite:

    def test_remove(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        existing = FavoriteFactory.create_favorite(landlord_user.id, tenant_user.id)

        assert favorite_service.remove(landlord_user, tenant_user.id, [existing]) is existing

    def test_remove_missing(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        foreign = FavoriteFactory.create_favorite(uuid.uuid4(), tenant_user.id)

        with pytest.raises(NotFoundError):
            favorite_service.remove(landlord_user, tenant_user.id, [foreign])


class TestListFavorites:

    def test_newest_first_with_profiles(self, favorite_service: FavoriteService, landlord_user: User):
        older = FavoriteFactory.create_favorite(landlord_user.id, created_offset=10)
        newer = FavoriteFactory.create_favorite(landlord_user.id, created_offset=1)
        no_profile = FavoriteFactory.create_favorite(landlord_user.id)
        foreign = FavoriteFactory.create_favorite(uuid.uuid4())
        profiles = {
            favorite.tenant_id: ProfileFactory.create_profile(user_id=favorite.tenant_id)
            for favorite in (older, newer, foreign)
        }

        page = favorite_service.list_favorites(landlord_user, [older, no_profile, foreign, newer], profiles)

        assert [entry.favorite.id for entry in page.favorites] == [newer.id, older.id]
        assert page.favorites[0].profile.user_id == newer.tenant_id
        assert page.pagination.total_count == 2


class TestCheckFavorite:

    def test_favorited(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        existing = FavoriteFactory.create_favorite(landlord_user.id, tenant_user.id, note="연락 예정")

        check = favorite_service.check(landlord_user, tenant_user.id, [existing])

        assert check.is_favorited is True
        assert check.favorite_id == existing.id
        assert check.note == "연락 예정"

    def test_not_favorited(self, favorite_service: FavoriteService, landlord_user: User, tenant_user: User):
        check = favorite_service.check(landlord_user, tenant_user.id, [])

        assert check.is_favorited is False
        assert check.favorite_id is None

    def test_tenant_always_false(self, favorite_service: FavoriteService, tenant_user: User):
        check = favorite_service.check(tenant_user, uuid.uuid4(), [])

        assert check.is_favorited is False
