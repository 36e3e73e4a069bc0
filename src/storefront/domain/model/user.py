"""User entity — an account that can sign in to the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from passlib.context import CryptContext

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.base import Entity, new_id, utcnow
from storefront.domain.model.value_objects import Email

MIN_PASSWORD_LENGTH = 6

_pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class UserRole(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"
    PRODUCT_MANAGER = "product-manager"
    ORDER_MANAGER = "order-manager"
    GUEST = "guest"


class Permission(Enum):
    PRODUCT_READ = "product:read"
    PRODUCT_CREATE = "product:create"
    PRODUCT_UPDATE = "product:update"
    PRODUCT_DELETE = "product:delete"
    CART_READ = "cart:read"
    CART_WRITE = "cart:write"
    ORDER_READ = "order:read"
    ORDER_CREATE = "order:create"
    ORDER_UPDATE = "order:update"
    ORDER_DELETE = "order:delete"
    ADMIN_ALL = "admin:all"


ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.CUSTOMER: frozenset({
        Permission.PRODUCT_READ,
        Permission.CART_READ,
        Permission.CART_WRITE,
        Permission.ORDER_READ,
        Permission.ORDER_CREATE,
    }),
    UserRole.PRODUCT_MANAGER: frozenset({
        Permission.PRODUCT_READ,
        Permission.PRODUCT_CREATE,
        Permission.PRODUCT_UPDATE,
        Permission.PRODUCT_DELETE,
    }),
    UserRole.ORDER_MANAGER: frozenset({
        Permission.PRODUCT_READ,
        Permission.ORDER_READ,
        Permission.ORDER_UPDATE,
        Permission.ORDER_DELETE,
    }),
    UserRole.GUEST: frozenset({Permission.PRODUCT_READ}),
}


def permissions_for(roles: list[UserRole]) -> frozenset[Permission]:
    """Union of the permissions granted by *roles*."""
    granted: set[Permission] = set()
    for role in roles:
        granted |= ROLE_PERMISSIONS.get(role, frozenset())
    return frozenset(granted)


def _parse_roles(roles: list[str] | list[UserRole]) -> list[UserRole]:
    if not roles:
        raise ValidationError("User must have at least one role")
    parsed: list[UserRole] = []
    for role in roles:
        try:
            value = role if isinstance(role, UserRole) else UserRole(role)
        except ValueError as exc:
            raise ValidationError(f"Invalid role: {role}") from exc
        if value not in parsed:
            parsed.append(value)
    return parsed


def _hash_password(password: str) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return _pwd_ctx.hash(password)


@dataclass(eq=False)
class User(Entity):
    """Only the password hash is kept; plain passwords never reach storage."""

    id: str
    email: Email
    password_hash: str
    roles: list[UserRole]
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def register(
        email: str,
        password: str,
        roles: list[str] | list[UserRole] | None = None,
        user_id: str | None = None,
    ) -> User:
        return User(
            id=user_id or new_id(),
            email=Email(email),
            password_hash=_hash_password(password),
            roles=_parse_roles(roles or [UserRole.CUSTOMER]),
        )

    def verify_password(self, plain_password: str) -> bool:
        if not plain_password:
            return False
        return _pwd_ctx.verify(plain_password, self.password_hash)

    def change_password(self, new_password: str) -> None:
        self.password_hash = _hash_password(new_password)
        self.touch()

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    @property
    def permissions(self) -> frozenset[Permission]:
        return permissions_for(self.roles)

    def has_permission(self, permission: Permission) -> bool:
        """``admin:all`` implies every other permission."""
        granted = self.permissions
        return Permission.ADMIN_ALL in granted or permission in granted

    @property
    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN)
