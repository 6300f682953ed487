# sponsor_hub/main.py
import logging

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from sponsor_hub.core.config import settings
from sponsor_hub.core.observability import setup_logging
from sponsor_hub.db.session import engine
from sponsor_hub.db.base import Base

# Import models so SQLAlchemy knows about them (for create_all)
from sponsor_hub.models.user import User  # noqa: F401
from sponsor_hub.models.survey import Survey, SurveySponsor  # noqa: F401

# Routers
from sponsor_hub.api.error_handlers import register_error_handlers
from sponsor_hub.api.routes import router as public_router
from sponsor_hub.api.user_routes import router as user_router
from sponsor_hub.api.survey_routes import router as survey_router
from sponsor_hub.api.sponsor_routes import router as sponsor_router

logger = logging.getLogger(__name__)

# The same API is served under both prefixes
API_PREFIXES = ("/api", "/sponsor-hub/api")


def build_api_router() -> APIRouter:
    api = APIRouter()
    api.include_router(public_router)    # /, /health, /auth/*
    api.include_router(user_router)      # /users/*
    api.include_router(survey_router)    # /surveys/*
    api.include_router(sponsor_router)   # /sponsors, /surveys/{id}/sponsors/*
    return api


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    app = FastAPI(title=settings.APP_NAME)

    # Root -> redirect to Swagger UI
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    # CORS
    origins = [o.strip() for o in settings.BACKEND_CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Ensure tables exist
    Base.metadata.create_all(bind=engine)

    api = build_api_router()
    for prefix in API_PREFIXES:
        app.include_router(api, prefix=prefix)

    logger.info("%s ready (%s)", settings.APP_NAME, settings.APP_ENV)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "sponsor_hub.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
    )
