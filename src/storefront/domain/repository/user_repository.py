"""Abstract repository for User accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return the user registered under *email* (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every registered user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove a user. Deleting an unknown ID is a no-op."""
