"""
Tenant search service for landlords browsing tenant profiles.
Filters, orders and paginates tenants and attaches a freshly computed trust score.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import logging

from rental_trust.models.profile import Profile
from rental_trust.models.reference import ReferenceResponse
from rental_trust.models.user import User
from rental_trust.models.verification import Verification
from rental_trust.schemas.common import paginate
from rental_trust.schemas.landlord import TenantFilter, TenantSummary, TenantPage
from rental_trust.services.trust_score import calculate_trust_score
from rental_trust.utils.dependencies import require_landlord
from rental_trust.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class TenantRecord:
    """A tenant's profile joined with their verification row and survey responses."""
    profile: Profile
    verification: Optional[Verification] = None
    reference_responses: List[ReferenceResponse] = field(default_factory=list)


class TenantSearchService:
    """
    Landlord-facing tenant listing.

    Only complete profiles are listed. Filtering and ordering use the stored
    trust_score; each returned tenant's score is then recomputed from the
    verification row so the listing reflects recent verifications.
    """

    def search(
        self,
        viewer: Optional[User],
        tenants: Iterable[TenantRecord],
        filters: TenantFilter
    ) -> TenantPage:
        """
        Return one page of tenants matching filters.

        Args:
            viewer: The requesting user; must be a landlord
            tenants: Candidate tenants
            filters: Validated filter and pagination parameters

        Returns:
            TenantPage with the page items and pagination metadata

        Raises:
            UnauthorizedError: If there is no viewer
            LandlordOnlyError: If the viewer is not a landlord
        """
        require_landlord(viewer, "search tenants")

        matches = [tenant for tenant in tenants if self._matches(tenant.profile, filters)]
        matches.sort(
            key=lambda tenant: (tenant.profile.trust_score, tenant.profile.created_at),
            reverse=True
        )

        page_items, pagination = paginate(matches, filters.page, filters.limit)

        summaries = [self._summarize(tenant) for tenant in page_items]

        logger.debug(
            f"Tenant search by {viewer.id}: {pagination.total_count} matches, "
            f"page {filters.page} ({len(summaries)} items)"
        )

        return TenantPage(profiles=summaries, pagination=pagination)

    def get_tenant(self, viewer: Optional[User], tenant: Optional[TenantRecord]) -> TenantSummary:
        """
        Detail view of a single tenant, including reference responses in the score.

        Raises:
            LandlordOnlyError: If the viewer is not a landlord
            NotFoundError: If the tenant has no profile
        """
        require_landlord(viewer, "view a tenant")
        if tenant is None:
            raise NotFoundError("Tenant")

        breakdown = calculate_trust_score(
            tenant.profile,
            tenant.verification,
            tenant.reference_responses
        )
        return TenantSummary(
            profile=tenant.profile,
            verification=tenant.verification,
            reference_responses=list(tenant.reference_responses),
            trust_score=breakdown.total,
            breakdown=breakdown,
        )

    @staticmethod
    def _matches(profile: Profile, filters: TenantFilter) -> bool:
        if not profile.is_complete:
            return False
        if filters.age_range is not None and profile.age_range != filters.age_range:
            return False
        if filters.family_type is not None and profile.family_type != filters.family_type:
            return False
        if filters.min_score is not None and profile.trust_score < filters.min_score:
            return False
        if filters.smoking_flag is not None and profile.smoking != filters.smoking_flag:
            return False
        return True

    @staticmethod
    def _summarize(tenant: TenantRecord) -> TenantSummary:
        # Listing scores omit reference responses; the detail view includes them
        breakdown = calculate_trust_score(tenant.profile, tenant.verification)
        return TenantSummary(
            profile=tenant.profile,
            verification=tenant.verification,
            trust_score=breakdown.total,
            breakdown=breakdown,
        )
