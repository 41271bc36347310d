"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from commerce.domain.model.account import UserAccount
from commerce.domain.model.entity import ActivationStatus
from commerce.domain.model.user import User
from commerce.domain.repository.user_repository import UserRepository
from commerce.infrastructure.persistence.json_file import (
    JsonFile,
    meta_from_raw,
    meta_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_username(self, username: str) -> User | None:
        for raw in self._file.load():
            if raw["username"] == username:
                return self._to_domain(raw)
        return None

    def save(self, user: User) -> None:
        if user.meta.id is None:
            user.meta.id = self._file.next_id()
        self._file.upsert(self._to_raw(user), key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            **meta_to_raw(user.meta),
            "username": user.username,
            "email": user.email,
            "phone": user.phone,
            "balance": money_to_raw(user.balance),
            "status": user.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User.rehydrate(
            meta=meta_from_raw(raw),
            username=raw["username"],
            email=raw.get("email", ""),
            phone=raw.get("phone", ""),
            account=UserAccount(money_from_raw(raw["balance"])),
            status=ActivationStatus(raw["status"]),
        )
