from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from components.authservice import AuthConfig, AuthService, HS256TokenSigner, PasswordHasher, auth_router
from components.authservice.contracts import ClockPort
from components.common.errors import ConfigurationError
from components.configstore import ConfigService, InMemoryBackend, JsonFileBackend, OperatorStore, StoreBackend, config_router
from components.maildispatcher import MailDispatcher, MailTransportPort, SmtpMailTransport, mail_router
from .errors import install_error_handlers
from .observability import RequestContextMiddleware
from .settings import APP_NAME, AdminSettings


def make_store_backend(settings: AdminSettings) -> StoreBackend:
    backend = settings.STORE_BACKEND.lower()
    if backend == "json":
        return JsonFileBackend(settings.STORE_PATH)
    if backend == "memory":
        return InMemoryBackend()
    raise ConfigurationError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")


def create_app(
    settings: Optional[AdminSettings] = None,
    *,
    backend: Optional[StoreBackend] = None,
    transport: Optional[MailTransportPort] = None,
    clock: Optional[ClockPort] = None,
) -> FastAPI:
    settings = settings or AdminSettings()
    if not settings.AUTH_SECRET:
        raise ConfigurationError("AUTH_SECRET must be set to sign access tokens")

    hasher = PasswordHasher(iterations=settings.PASSWORD_HASH_ITERATIONS)
    store = OperatorStore(
        backend or make_store_backend(settings),
        hasher=hasher,
        admin_email=settings.ADMIN_EMAIL,
        admin_password=settings.ADMIN_PASSWORD,
    )
    auth_cfg = AuthConfig(
        secret=settings.AUTH_SECRET,
        token_ttl_seconds=settings.TOKEN_TTL_SECONDS,
        issuer=settings.AUTH_ISSUER,
    )
    config_service = ConfigService(store)

    app = FastAPI(title=APP_NAME, version=settings.APP_VERSION)
    app.state.store = store
    app.state.auth_service = AuthService(
        store=store, signer=HS256TokenSigner(auth_cfg.secret), hasher=hasher, cfg=auth_cfg, clock=clock,
    )
    app.state.config_service = config_service
    app.state.mail_dispatcher = MailDispatcher(
        config_service, transport or SmtpMailTransport(timeout=settings.SMTP_TIMEOUT_SECONDS),
    )

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(config_router)
    app.include_router(mail_router)

    @app.get("/healthz")
    def healthz():
        return {
            "status": "ok",
            "version": settings.APP_VERSION,
            "time": datetime.now(timezone.utc).isoformat(),
        }

    return app
