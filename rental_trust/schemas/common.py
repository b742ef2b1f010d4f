"""
Shared schema configuration, field checks and pagination.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Callable, List, Sequence, Tuple
import math

from rental_trust.utils.exceptions import ValidationError


class RequestSchema(BaseModel):
    """
    Base for request payloads.
    Accepts both the camelCase keys clients send and snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=False,
    )


def run_check(check: Callable[..., Any], value: Any, field_name: str) -> Any:
    """Run a ValidationUtils check inside a pydantic validator."""
    try:
        return check(value, field_name)
    except ValidationError as e:
        raise ValueError(e.detail)


class Pagination(BaseModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


def paginate(items: Sequence[Any], page: int, limit: int) -> Tuple[List[Any], Pagination]:
    """Slice one page out of already ordered items."""
    total_count = len(items)
    offset = (page - 1) * limit
    return list(items[offset:offset + limit]), Pagination(
        page=page,
        limit=limit,
        total_count=total_count,
        total_pages=math.ceil(total_count / limit),
    )
