"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import cached_property

from sqlalchemy.engine import Engine

from authgate.application.services.authorization import AuthorizationPolicy, default_policy
from authgate.application.services.password_hashing import WerkzeugPasswordHasher
from authgate.application.services.token_codec import JwtTokenCodec
from authgate.application.use_cases.users.authenticate_user import AuthenticationProvider
from authgate.application.use_cases.users.login_user import LoginUserUseCase
from authgate.application.use_cases.users.register_user import RegisterUserUseCase
from authgate.infrastructure.db import SessionFactory, create_db_engine, create_session_factory
from authgate.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authgate.interfaces.http.controllers.admin_controller import AdminController
from authgate.interfaces.http.controllers.join_controller import JoinController
from authgate.interfaces.http.controllers.main_controller import MainController
from authgate.interfaces.http.middleware.authorization import AuthorizationInterceptor
from authgate.interfaces.http.middleware.chain import InterceptorChain
from authgate.interfaces.http.middleware.login_gate import LoginInterceptor
from authgate.interfaces.http.middleware.token_authentication import (
    TokenAuthenticationInterceptor,
)
from authgate.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self._clock = clock

    # Infrastructure

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        return JwtTokenCodec(self.config.jwt_secret, clock=self._clock)

    # Use cases

    @cached_property
    def authentication_provider(self) -> AuthenticationProvider:
        return AuthenticationProvider(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            provider=self.authentication_provider,
            codec=self.token_codec,
            token_ttl_ms=self.config.token_ttl_ms,
        )

    @cached_property
    def authorization_policy(self) -> AuthorizationPolicy:
        return default_policy()

    # HTTP

    @cached_property
    def interceptor_chain(self) -> InterceptorChain:
        return InterceptorChain(
            [
                LoginInterceptor(login_use_case=self.login_user_use_case),
                TokenAuthenticationInterceptor(codec=self.token_codec),
                AuthorizationInterceptor(policy=self.authorization_policy),
            ]
        )

    @cached_property
    def main_controller(self) -> MainController:
        return MainController()

    @cached_property
    def admin_controller(self) -> AdminController:
        return AdminController()

    @cached_property
    def join_controller(self) -> JoinController:
        return JoinController(register_use_case=self.register_user_use_case)

    def dispose(self) -> None:
        self.session_factory.remove()
        self.engine.dispose()
