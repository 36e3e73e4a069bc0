"""Application service: Register User use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import UserDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, email: str, password: str, roles: list[str] | None = None) -> UserDTO:
        user = User.register(email, password, roles)
        if self._user_repo.get_by_email(user.email.value) is not None:
            raise ValidationError(f"A user with email {user.email} already exists")

        self._user_repo.save(user)
        logger.info("User registered", user_id=user.id, roles=[r.value for r in user.roles])
        return UserDTO.from_user(user)
