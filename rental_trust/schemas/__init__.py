"""
Pydantic schemas for request validation and service results.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    SignupRequest,
    PhoneCodeRequest,
    PhoneCodeVerify,
    PhoneCodeIssued
)

# Shared schemas
from .common import Pagination, paginate

# Profile schemas
from .profile import ProfileUpdate

# Reference schemas
from .reference import (
    ReferenceRequestCreate,
    ReferenceSurveySubmit,
    ReferenceTokenStatus,
    ReferenceRequestResult
)

# Verification schemas
from .verification import (
    EmploymentVerificationRequest,
    IncomeVerificationRequest,
    IdentityVerificationRequest,
    VerificationResult,
    EmploymentVerificationResult,
    IncomeVerificationResult,
    CreditVerificationResult,
    IdentityVerificationResult,
    VerificationStatus
)

# Trust score schemas
from .trust_score import TrustScoreBreakdown, TrustScoreLevel

# Landlord schemas
from .landlord import (
    LandlordProfileUpdate,
    TenantFilter,
    TenantSummary,
    TenantPage
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyListFilter,
    PropertyListing,
    PropertyPage,
    PropertyDetail
)

# Messaging schemas
from .message import (
    ConversationCreate,
    MessageCreate,
    Participant,
    ConversationSummary,
    ConversationPage,
    ConversationStart,
    ConversationThread
)

# Favorite schemas
from .favorite import FavoriteCreate, FavoriteEntry, FavoritePage, FavoriteCheck

# Statistics schemas
from .stats import StatsSummary, ActivityItem, MonthlyStat, LandlordStats

# Image schemas
from .image import ResizeOptions, ImageProcessResult, ImageMetadata, ImageValidationResult

__all__ = [
    # Authentication
    "LoginRequest",
    "SignupRequest",
    "PhoneCodeRequest",
    "PhoneCodeVerify",
    "PhoneCodeIssued",

    # Shared
    "Pagination",
    "paginate",

    # Profile
    "ProfileUpdate",

    # Reference
    "ReferenceRequestCreate",
    "ReferenceSurveySubmit",
    "ReferenceTokenStatus",
    "ReferenceRequestResult",

    # Verification
    "EmploymentVerificationRequest",
    "IncomeVerificationRequest",
    "IdentityVerificationRequest",
    "VerificationResult",
    "EmploymentVerificationResult",
    "IncomeVerificationResult",
    "CreditVerificationResult",
    "IdentityVerificationResult",
    "VerificationStatus",

    # Trust score
    "TrustScoreBreakdown",
    "TrustScoreLevel",

    # Landlord
    "LandlordProfileUpdate",
    "TenantFilter",
    "TenantSummary",
    "TenantPage",

    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyListFilter",
    "PropertyListing",
    "PropertyPage",
    "PropertyDetail",

    # Messaging
    "ConversationCreate",
    "MessageCreate",
    "Participant",
    "ConversationSummary",
    "ConversationPage",
    "ConversationStart",
    "ConversationThread",

    # Favorites
    "FavoriteCreate",
    "FavoriteEntry",
    "FavoritePage",
    "FavoriteCheck",

    # Statistics
    "StatsSummary",
    "ActivityItem",
    "MonthlyStat",
    "LandlordStats",

    # Image
    "ResizeOptions",
    "ImageProcessResult",
    "ImageMetadata",
    "ImageValidationResult",
]
