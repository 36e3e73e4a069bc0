"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.user import User, UserRole
from storefront.domain.model.value_objects import Email
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.json_file import JsonRecordFile


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        for raw in self._file.load():
            if raw["email"] == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, user: User) -> None:
        self._file.upsert(self._to_raw(user))

    def delete(self, user_id: str) -> None:
        self._file.remove(user_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "email": user.email.value,
            "password_hash": user.password_hash,
            "roles": [role.value for role in user.roles],
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            email=Email(raw["email"]),
            password_hash=raw["password_hash"],
            roles=[UserRole(role) for role in raw["roles"]],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
