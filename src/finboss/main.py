import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from finboss import __version__
from finboss.api.middleware.error_handler import register_error_handlers
from finboss.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from finboss.api.middleware.rate_limit import limiter
from finboss.api.v1 import router as v1_router
from finboss.api.v1.health import router as health_router
from finboss.config import settings
from finboss.db.session import AsyncSessionLocal, async_engine
from finboss.services.category import seed_default_categories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    async with AsyncSessionLocal() as session:
        await seed_default_categories(session)
    logger.info(f"FinBoss API started ({settings.app_env})")
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="FinBoss API",
        description="Personal finance management: transactions, budgets and spending analytics",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Middleware runs outermost-last: CORS, then request logging, then rate limiting
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.allowed_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
