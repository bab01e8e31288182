import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import Settings, get_settings
from .core.exceptions import register_exception_handlers
from .core.logs import configure_logging, log_requests
from .core.security import TokenService
from .routers import api_router
from .services.credentials import AcceptAnyPassword, CredentialVerifier
from .services.database import init_db, make_engine, make_sessionmaker

log = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    credential_verifier: CredentialVerifier | None = None,
) -> FastAPI:
    """
    Build the application.  Everything request handlers need (settings,
    token service, DB session factory, credential verifier) hangs off
    `app.state` – there are no module-level singletons besides `app`.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.database_url)
        await init_db(engine)
        app.state.engine = engine
        app.state.sessionmaker = make_sessionmaker(engine)
        log.info("Users API up (%s) – database %s", settings.environment, engine.url)
        if settings.environment == "production" and settings.uses_demo_secret:
            log.warning("USERS_API_JWT_SECRET is the demo default – override it in production")
        yield
        await engine.dispose()

    app = FastAPI(title="Users API", lifespan=lifespan)
    app.state.settings = settings
    app.state.token_service = TokenService(settings)
    app.state.credential_verifier = credential_verifier or AcceptAnyPassword()

    register_exception_handlers(app)
    app.middleware("http")(log_requests)
    app.include_router(api_router)
    return app


configure_logging(get_settings().log_level)
app = create_app()
