from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from authgate.domain.users.entities import ROLE_ADMIN, Found, NotFound, User
from authgate.domain.users.exceptions import DuplicateUsernameError
from authgate.infrastructure.db import create_db_engine, create_session_factory, init_db
from authgate.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authgate.shared.config import DatabaseConfig


@pytest.fixture(params=["file", "memory"])
def repository(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[SqlAlchemyUserRepository]:
    url = f"sqlite:///{tmp_path / 'users.db'}" if request.param == "file" else "sqlite://"
    engine = create_db_engine(DatabaseConfig.model_validate({"DATABASE_URL": url}))
    init_db(engine)
    factory = create_session_factory(engine)
    yield SqlAlchemyUserRepository(factory)
    factory.remove()
    engine.dispose()


def _user(username: str) -> User:
    return User(id=0, username=username, password_hash="hash", role=ROLE_ADMIN)


def test_add_assigns_surrogate_id(repository: SqlAlchemyUserRepository) -> None:
    first = repository.add(_user("alice"))
    second = repository.add(_user("bob"))

    assert first.id > 0
    assert second.id != first.id
    assert second.username == "bob"


def test_find_by_username_returns_found(repository: SqlAlchemyUserRepository) -> None:
    stored = repository.add(_user("alice"))

    lookup = repository.find_by_username("alice")

    assert isinstance(lookup, Found)
    assert lookup.user == stored
    assert lookup.user.role == ROLE_ADMIN


def test_find_by_username_returns_not_found(repository: SqlAlchemyUserRepository) -> None:
    assert repository.find_by_username("ghost") == NotFound(username="ghost")


def test_exists_by_username(repository: SqlAlchemyUserRepository) -> None:
    assert repository.exists_by_username("alice") is False
    repository.add(_user("alice"))
    assert repository.exists_by_username("alice") is True


def test_duplicate_username_violates_unique_constraint(
    repository: SqlAlchemyUserRepository,
) -> None:
    repository.add(_user("alice"))

    with pytest.raises(DuplicateUsernameError):
        repository.add(_user("alice"))

    assert isinstance(repository.find_by_username("alice"), Found)
