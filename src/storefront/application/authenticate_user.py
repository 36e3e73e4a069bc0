"""Application service: Authenticate User use case.

Checks credentials only; issuing session tokens is left to whatever
front end sits on top.  Unknown e-mail and wrong password fail with the
same message so callers cannot tell which addresses are registered.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import UserDTO
from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"


class AuthenticateUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, email: str, password: str) -> UserDTO:
        return UserDTO.from_user(self.authenticate(email, password))

    def authenticate(self, email: str, password: str) -> User:
        """Return the matching user, or raise AuthenticationError."""
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        user = self._user_repo.get_by_email(email)
        if user is None or not user.verify_password(password):
            logger.warning("Authentication failed", email=email.strip().lower())
            raise AuthenticationError(_INVALID_CREDENTIALS)

        logger.info("User authenticated", user_id=user.id)
        return user
