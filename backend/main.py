# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from config import settings
from database.session import engine, init_db, wait_for_database
from gateway.gateway_router import gateway_router
from services import cloudinary_service

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("FastAPI is starting (env=%s)", settings.APP_ENV)
    wait_for_database(engine)
    init_db(engine)

    if cloudinary_service.is_configured():
        logger.info("Cloudinary configured: %s", settings.CLOUDINARY_CLOUD_NAME)
    else:
        logger.warning("Cloudinary not configured; product images are disabled")

    yield
    # Shutdown
    logger.info("Shutting down")
    engine.dispose()


def create_app() -> FastAPI:
    if not settings.SESSION_SECRET:
        raise RuntimeError("SESSION_SECRET is missing. Set it in the environment or .env")

    app = FastAPI(
        title="Inventory Manager API",
        description="Product catalog, order intake and admin/worker sessions",
        version=VERSION,
        lifespan=lifespan,
    )

    # signed cookie session; the "user" key holds {id, username, role}
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie="session",
        max_age=settings.SESSION_MAX_AGE,
        same_site="none" if settings.IS_PRODUCTION else "lax",
        https_only=settings.IS_PRODUCTION,
    )

    # CORS with cookies: explicit origins only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/health")
    async def health():
        status = {
            "status": "healthy",
            "service": "inventory-manager-api",
            "version": VERSION,
        }

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["database"] = "connected"
        except SQLAlchemyError as e:
            status["database"] = f"error: {e.__class__.__name__}"
            status["status"] = "degraded"

        status["cloudinary"] = "configured" if cloudinary_service.is_configured() else "not configured"
        return status

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the Inventory Manager API",
            "version": VERSION,
            "gateway_base": "/api/v1/gateway",
            "docs": "/docs",
        }

    app.include_router(gateway_router, prefix="/api/v1")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
