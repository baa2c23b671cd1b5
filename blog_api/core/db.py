import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from blog_api.config import settings
from blog_api.db import models  # noqa: F401  регистрация таблиц
from blog_api.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseNotConnectedError(RuntimeError):
    """Сессия запрошена до подключения к базе"""


class Database:
    """Движок и фабрика сессий, которыми владеет жизненный цикл сервера"""

    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self, database_url: str) -> None:
        """Создание движка и таблиц"""
        if self.engine is not None:
            raise RuntimeError("Database is already connected")

        engine = create_async_engine(database_url, future=True, echo=settings.db_echo)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise

        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info(f"Connected to database {engine.url.render_as_string(hide_password=True)}")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database connection closed")

    async def drop_all(self) -> None:
        """Удаление всех таблиц и их повторное создание (пустое хранилище)"""
        if self.engine is None:
            raise DatabaseNotConnectedError("Database is not connected")
        logger.warning("Dropping database tables")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        if self.engine is None:
            return False
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise DatabaseNotConnectedError("Database is not connected")
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()


def get_database(request: Request) -> Database:
    """База данных, к которой привязано приложение"""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotConnectedError("Database is not connected")
    return database


# Функция для dependency injection в FastAPI
async def get_db(database: Database = Depends(get_database)):
    async with database.session() as session:
        yield session
