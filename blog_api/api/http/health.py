import logging
from typing import Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blog_api.core.db import Database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Проверка доступности сервиса и базы данных"""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    try:
        db_ok = database is not None and await database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database ping failed: {e}")
        db_ok = False

    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": False}
        )
    return {"status": "ok", "database": True}
