"""
Access checks shared by the services.
Each takes the requesting user, which is None when nobody is signed in.
"""

import logging
from typing import Optional

from rental_trust.models.user import User
from rental_trust.utils.exceptions import UnauthorizedError, LandlordOnlyError

logger = logging.getLogger(__name__)


def require_user(user: Optional[User]) -> User:
    """
    Require a signed-in user.

    Raises:
        UnauthorizedError: If there is no user
    """
    if user is None:
        raise UnauthorizedError()
    return user


def require_landlord(user: Optional[User], action: str = "access landlord resources") -> User:
    """
    Require a signed-in landlord.

    Args:
        user: The requesting user
        action: What the user attempted, for the log line

    Raises:
        UnauthorizedError: If there is no user
        LandlordOnlyError: If the user is not a landlord
    """
    user = require_user(user)
    if not user.is_landlord:
        logger.warning(f"Non-landlord user {user.id} attempted to {action}")
        raise LandlordOnlyError()
    return user
