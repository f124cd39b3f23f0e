from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import logging

from eca_admin.core.config import Settings, settings as default_settings
from eca_admin.core.exceptions import AppError, classify_storage_error
from eca_admin.database.db import Database
from eca_admin.routers.api import (
    api_assignments,
    api_auth,
    api_books,
    api_coups_de_coeur,
    api_genres,
    api_news,
    api_orders,
    api_users,
)
from eca_admin.seed import seed_reference_data

# ✅ Logging
logging.basicConfig(
    level=logging.INFO if not default_settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

tags_metadata = [
    {"name": "default", "description": "Health check"},
    {"name": "Auth (API)"},
    {"name": "Assignments (API)", "description": "Book assignments to volunteer readers"},
    {"name": "Coups de coeur (API)", "description": "Curated book collections"},
    {"name": "Books (API)"},
    {"name": "Genres (API)"},
    {"name": "News (API)"},
    {"name": "Orders (API)"},
    {"name": "Users (API)"},
]


def _error_response(status_code: int, message: str, details: str | None = None):
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message} ({exc.details})")
        details = exc.details if config.DEBUG else None
        return _error_response(exc.status_code, exc.message, details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = _error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        return await app_error_handler(request, classify_storage_error(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        details = repr(exc) if config.DEBUG else None
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, AppError.default_message, details
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    The database engine is created in the lifespan, stored on
    ``app.state.db`` and disposed at shutdown.
    """
    config = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 {config.APP_NAME} starting up...")
        logger.info(f"📊 Debug mode: {config.DEBUG}")
        logger.info(f"🔐 CORS origins: {config.ALLOWED_ORIGINS}")

        database = Database(config.DATABASE_URL, echo=False)
        app.state.db = database
        if config.AUTO_CREATE_TABLES:
            await database.create_all()
        if config.SEED_REFERENCE_DATA:
            await seed_reference_data(database, config)

        yield

        logger.info(f"🛑 {config.APP_NAME} shutting down...")
        await database.dispose()

    app = FastAPI(
        title=config.APP_NAME,
        description="Back office of the ECA audio library",
        version="1.0.0",
        openapi_tags=tags_metadata,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = config

    # ✅ Rate limiter
    app.state.limiter = api_auth.configure_limiter(config)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, config)

    @app.get("/health", tags=["default"])
    async def health_check():
        return {"status": "healthy", "app": config.APP_NAME}

    app.include_router(api_auth.router)
    app.include_router(api_assignments.router)
    app.include_router(api_coups_de_coeur.router)
    app.include_router(api_books.router)
    app.include_router(api_genres.router)
    app.include_router(api_news.router)
    app.include_router(api_orders.router)
    app.include_router(api_users.router)
    return app


app = create_app()

# uvicorn eca_admin.main:app --reload
