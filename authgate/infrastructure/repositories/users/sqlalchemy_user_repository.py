# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError

from authgate.domain.users.entities import Found, NotFound, UserLookup
from authgate.domain.users.entities import User as DomainUser
from authgate.domain.users.exceptions import DuplicateUsernameError
from authgate.domain.users.repositories import UserRepository
from authgate.infrastructure.db.models import User
from authgate.infrastructure.db.session import SessionFactory, session_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        role=row.role,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> UserLookup:
        with session_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            if row is None:
                return NotFound(username=username)
            return Found(user=_to_domain(row))

    def exists_by_username(self, username: str) -> bool:
        with session_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(User.username == username))))

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(username=user.username, password_hash=user.password_hash, role=user.role)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateUsernameError(context={"username": user.username}) from exc
