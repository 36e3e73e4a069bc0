"""Permission checks applied by use cases that change the catalog or orders."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import AuthorizationError
from storefront.domain.model.user import Permission, User

logger = structlog.get_logger(__name__)


def require_permission(actor: User, permission: Permission) -> None:
    """Raise AuthorizationError unless *actor* holds *permission*."""
    if actor.has_permission(permission):
        return
    logger.warning(
        "Permission denied",
        user_id=actor.id,
        roles=[r.value for r in actor.roles],
        required=permission.value,
    )
    raise AuthorizationError(
        f"User {actor.email} is not allowed to perform {permission.value}",
        required=permission.value,
    )
