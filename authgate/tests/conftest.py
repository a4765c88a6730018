from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from flask import Flask

from authgate.app import create_app
from authgate.container import Container
from authgate.shared.config import AppConfig

TEST_SECRET = "test-secret-for-hs256-signing-0123456789abcdef"
T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class FrozenClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_config(db_url: str, **overrides: Any) -> AppConfig:
    data: dict[str, Any] = {
        "APP_ENV": "testing",
        "JWT_SECRET": TEST_SECRET,
        "DEBUG_LOGGING": False,
        "database": {"DATABASE_URL": db_url},
        "security": {"ALLOWED_ORIGINS": "*", "ENABLE_HSTS": False},
    }
    data.update(overrides)
    return AppConfig.model_validate(data)


@pytest.fixture(autouse=True)
def _isolated_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return make_config(f"sqlite:///{tmp_path / 'authgate.db'}")


@pytest.fixture()
def container(config: AppConfig, clock: FrozenClock) -> Iterator[Container]:
    c = Container(config, clock=clock)
    yield c
    c.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)
