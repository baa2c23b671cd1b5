import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blog_api.api.http.health import router as health_router
from blog_api.api.http.posts import router as posts_router
from blog_api.core.db import Database, DatabaseNotConnectedError

logger = logging.getLogger(__name__)


def _describe_validation_error(error: dict) -> str:
    """Человекочитаемое описание первой ошибки валидации"""
    location, *path = error.get("loc", ()) or ("body",)
    field = ".".join(str(part) for part in path)

    if error.get("type") == "missing":
        if not field:
            return f"Missing request {location}"
        return f"Missing `{field}` in request {location}"
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    if not field:
        return f"Invalid request {location}: {error.get('msg')}"
    return f"Invalid `{field}` in request {location}: {error.get('msg')}"


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="Blog Posts API",
        description="CRUD API for blog posts",
        version="1.0.0"
    )
    app.state.database = database if database is not None else Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(posts_router)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = _describe_validation_error(errors[0]) if errors else "Invalid request"
        logger.info(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message}
        )

    @app.exception_handler(SQLAlchemyError)
    @app.exception_handler(DatabaseNotConnectedError)
    async def database_error_handler(request: Request, exc: Exception):
        logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )

    return app


app = create_app()
