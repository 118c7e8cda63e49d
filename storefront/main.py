import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import auth, categories, orders, products
from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import register_exception_handlers
from storefront.core.log import configure_logging, log_requests
from storefront.core.security import hasher_from_settings, issuer_from_settings
from storefront.db.session import Database

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db.create_all()
        logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started")
        try:
            yield
        finally:
            app.state.db.dispose()
            logger.info(f"{settings.APP_NAME} stopped")

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL)
    app.state.hasher = hasher_from_settings(settings)
    app.state.tokens = issuer_from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(categories.router, prefix="/categories", tags=["categories"])
    app.include_router(products.router, prefix="/products", tags=["products"])
    app.include_router(orders.router, prefix="/orders", tags=["orders"])

    @app.get("/")
    def root():
        return {"message": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
