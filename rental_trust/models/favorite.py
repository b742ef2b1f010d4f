"""
Tenant favorite record: a landlord's bookmark on a tenant profile.
"""

from pydantic import Field
from typing import Optional
import uuid

from rental_trust.models.base import Record


class TenantFavorite(Record):
    landlord_id: uuid.UUID
    tenant_id: uuid.UUID
    note: Optional[str] = Field(None, max_length=200)
