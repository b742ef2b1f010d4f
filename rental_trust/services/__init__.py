"""
Service layer for business logic implementation.
Contains services for trust scoring, profiles, verifications, references, tenant search,
images, properties, messaging, favorites, landlord statistics and phone codes.
"""

from .trust_score import (
    TrustScoreService,
    calculate_trust_score,
    get_trust_score_level,
    get_trust_score_label,
    get_trust_score_color
)
from .profile import ProfileService
from .verification import VerificationService, MockVerificationProvider, build_provider
from .reference import ReferenceService, classify_overall_rating
from .tenant_search import TenantSearchService, TenantRecord
from .property import PropertyService
from .messaging import MessagingService
from .favorite import FavoriteService
from .landlord_stats import LandlordStatsService
from .phone_verification import PhoneVerificationService
from .image import (
    resize_image,
    optimize_profile_image,
    create_thumbnail,
    optimize_document_image,
    get_image_metadata,
    validate_image,
    require_valid_image
)

__all__ = [
    "TrustScoreService",
    "calculate_trust_score",
    "get_trust_score_level",
    "get_trust_score_label",
    "get_trust_score_color",
    "ProfileService",
    "VerificationService",
    "MockVerificationProvider",
    "build_provider",
    "ReferenceService",
    "classify_overall_rating",
    "TenantSearchService",
    "TenantRecord",
    "PropertyService",
    "MessagingService",
    "FavoriteService",
    "LandlordStatsService",
    "PhoneVerificationService",
    "resize_image",
    "optimize_profile_image",
    "create_thumbnail",
    "optimize_document_image",
    "get_image_metadata",
    "validate_image",
    "require_valid_image"
]
