"""
Property service for landlords managing their rental listings.
Handles create/list/detail/update/delete with ownership checks and free-text sanitization.
"""

from typing import Iterable, Optional
import logging

from rental_trust.models.property import Property, PropertyImage
from rental_trust.models.user import User
from rental_trust.schemas.common import paginate
from rental_trust.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyListFilter,
    PropertyListing,
    PropertyPage,
    PropertyDetail
)
from rental_trust.utils.dependencies import require_landlord
from rental_trust.utils.exceptions import NotFoundError, ValidationError
from rental_trust.utils.sanitize import sanitize_user_input

logger = logging.getLogger(__name__)

# Required text fields keep their (sanitized) value; optional ones become None when blank
REQUIRED_TEXT_FIELDS = ("title", "address")
OPTIONAL_TEXT_FIELDS = ("description", "address_detail", "region")


class PropertyService:
    """
    Landlord listing management.

    Every operation is landlord-only. A landlord only ever sees their own
    listings: someone else's listing is reported as not found rather than
    forbidden.
    """

    def create_property(self, landlord: Optional[User], data: PropertyCreate) -> Property:
        """
        Register a new listing.

        Args:
            landlord: The requesting user; must be a landlord
            data: Validated listing payload

        Returns:
            The new listing, status available

        Raises:
            UnauthorizedError: If there is no user
            LandlordOnlyError: If the user is not a landlord
        """
        landlord = require_landlord(landlord, "create a property")

        property_obj = Property(
            landlord_id=landlord.id,
            **self._clean(data.model_dump())
        )

        logger.info(f"Property created by landlord {landlord.id}: {property_obj.id}")
        return property_obj

    def list_properties(
        self,
        landlord: Optional[User],
        properties: Iterable[Property],
        filters: PropertyListFilter,
        images: Iterable[PropertyImage] = ()
    ) -> PropertyPage:
        """
        One page of the landlord's own listings, newest first.

        Args:
            landlord: The requesting user; must be a landlord
            properties: Candidate listings
            filters: Page, limit and optional status
            images: Listing images, used to pick each main image

        Returns:
            PropertyPage with each listing's main image URL
        """
        landlord = require_landlord(landlord, "list properties")

        owned = [
            property_obj for property_obj in properties
            if property_obj.is_owned_by(landlord.id)
            and (filters.status is None or property_obj.status == filters.status)
        ]
        owned.sort(key=lambda property_obj: property_obj.created_at, reverse=True)

        page_items, pagination = paginate(owned, filters.page, filters.limit)

        main_images = {
            image.property_id: image.image_url
            for image in images
            if image.is_main
        }

        return PropertyPage(
            properties=[
                PropertyListing(
                    property=property_obj,
                    main_image_url=main_images.get(property_obj.id)
                )
                for property_obj in page_items
            ],
            pagination=pagination,
        )

    def get_property(
        self,
        landlord: Optional[User],
        property_obj: Optional[Property],
        images: Iterable[PropertyImage] = ()
    ) -> PropertyDetail:
        """
        A listing with its images in display order.

        Raises:
            NotFoundError: If the listing does not exist or belongs to another landlord
        """
        landlord = require_landlord(landlord, "view a property")
        property_obj = self._owned(landlord, property_obj)

        listing_images = sorted(
            (image for image in images if image.property_id == property_obj.id),
            key=lambda image: image.sort_order
        )
        return PropertyDetail(property=property_obj, images=listing_images)

    def update_property(
        self,
        landlord: Optional[User],
        property_obj: Optional[Property],
        data: PropertyUpdate
    ) -> Property:
        """
        Apply a partial update.

        Args:
            landlord: The requesting user; must own the listing
            property_obj: The stored listing
            data: Validated update; None fields are left as stored

        Returns:
            The updated listing

        Raises:
            NotFoundError: If the listing does not exist or belongs to another landlord
            ValidationError: If no field was provided
        """
        landlord = require_landlord(landlord, "update a property")
        property_obj = self._owned(landlord, property_obj)

        update_data = self._clean(data.model_dump(exclude_none=True))

        if not update_data:
            raise ValidationError("No valid fields provided for update")

        logger.info(f"Property {property_obj.id} updated by landlord {landlord.id}: {sorted(update_data)}")
        return property_obj.touch(**update_data)

    def delete_property(self, landlord: Optional[User], property_obj: Optional[Property]) -> Property:
        """
        Check a listing can be deleted by this landlord.

        Returns:
            The listing to delete

        Raises:
            NotFoundError: If the listing does not exist or belongs to another landlord
        """
        landlord = require_landlord(landlord, "delete a property")
        property_obj = self._owned(landlord, property_obj)

        logger.info(f"Property {property_obj.id} deleted by landlord {landlord.id}")
        return property_obj

    @staticmethod
    def _owned(landlord: User, property_obj: Optional[Property]) -> Property:
        if property_obj is None or not property_obj.is_owned_by(landlord.id):
            raise NotFoundError("Property")
        return property_obj

    @staticmethod
    def _clean(data: dict) -> dict:
        """Sanitize free text in a create or update payload."""
        for field in REQUIRED_TEXT_FIELDS:
            if field in data:
                data[field] = sanitize_user_input(data[field])
                if not data[field]:
                    raise ValidationError(f"{field} cannot be empty")

        for field in OPTIONAL_TEXT_FIELDS:
            if field in data:
                data[field] = sanitize_user_input(data[field]) or None

        return data
