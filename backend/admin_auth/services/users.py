# admin_auth/services/users.py
"""
User store.

Responsibilities:
- The `UserStore` contract the auth routes depend on (create / find by email / find by id)
- A SQLAlchemy-backed implementation over the `users` table
- An in-memory implementation with the same semantics, injectable in tests
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from admin_auth.models.user import User

logger = logging.getLogger(__name__)


class UserAlreadyExistsError(Exception):
    def __init__(self, email: str) -> None:
        super().__init__(f"user with email {email!r} already exists")
        self.email = email


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserStore(ABC):
    @abstractmethod
    def create(self, user: User) -> User:
        """
        Persist `user` and return it with its store-assigned id.

        Raises:
            UserAlreadyExistsError: another user already has this email
        """

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        ...


class SqlAlchemyUserStore(UserStore):
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, user: User) -> User:
        user.email = normalize_email(user.email)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.find_by_email(user.email) is not None:
                raise UserAlreadyExistsError(user.email) from e
            raise
        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}
        self._seq = 1

    def create(self, user: User) -> User:
        email = normalize_email(user.email)
        if self.find_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        user.id = self._seq
        user.email = email
        if user.created_at is None:
            user.created_at = datetime.now(timezone.utc)
        self._seq += 1
        self._by_id[user.id] = user
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        email = normalize_email(email)
        for user in self._by_id.values():
            if user.email == email:
                return user
        return None

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def __len__(self) -> int:
        return len(self._by_id)
