import asyncio
import enum
import logging
import socket
from typing import Optional

import uvicorn
from fastapi import FastAPI

from blog_api.config import settings
from blog_api.core.db import Database
from blog_api.main import create_app

logger = logging.getLogger(__name__)


class ServerState(str, enum.Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class ServerStateError(RuntimeError):
    """Недопустимый переход жизненного цикла сервера"""


def bind_socket(host: str, port: int) -> socket.socket:
    """Открытие слушающего сокета; занятый порт дает OSError"""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


class Server:
    """Запускает и останавливает HTTP-листенер вместе с подключением к БД.

    Порядок запуска: база данных, затем листенер. Остановка в обратном
    порядке. Каждый сервер работает со своей базой, привязанной к
    приложению через app.state.database.
    """

    def __init__(self, app: Optional[FastAPI] = None, database: Optional[Database] = None):
        if database is None and app is not None:
            database = getattr(app.state, "database", None)
        self.database = database if database is not None else Database()
        self.app = app if app is not None else create_app(self.database)
        self.app.state.database = self.database
        self.state = ServerState.STOPPED
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None
        self._socket: Optional[socket.socket] = None

    @property
    def port(self) -> Optional[int]:
        """Фактический порт листенера (важно при port=0)"""
        if self._socket is None or self._socket.fileno() == -1:
            return None
        return self._socket.getsockname()[1]

    @property
    def base_url(self) -> str:
        if self.state is not ServerState.RUNNING:
            raise ServerStateError("Server is not running")
        host = self._server.config.host
        if host in ("0.0.0.0", "::"):
            host = "127.0.0.1"
        return f"http://{host}:{self.port}"

    async def start(self, database_url: str, host: Optional[str] = None, port: Optional[int] = None) -> None:
        if self.state is not ServerState.STOPPED:
            raise ServerStateError(f"Cannot start server in state {self.state.value}")

        host = host if host is not None else settings.host
        port = port if port is not None else settings.port

        self.state = ServerState.STARTING
        logger.info("Starting server")
        connected = False
        try:
            await self.database.connect(database_url)
            connected = True

            self._socket = bind_socket(host, port)
            config = uvicorn.Config(
                self.app,
                host=host,
                port=port,
                lifespan="off",
                log_config=None,
            )
            self._server = uvicorn.Server(config)
            self._task = asyncio.create_task(self._server.serve(sockets=[self._socket]))

            while not self._server.started:
                if self._task.done():
                    # serve() завершился до начала приема соединений
                    try:
                        self._task.result()
                    except SystemExit as exc:
                        raise ServerStateError(f"HTTP listener failed to start on {host}:{port}") from exc
                    raise ServerStateError("HTTP listener exited during startup")
                await asyncio.sleep(0.01)
        except BaseException:
            logger.error("Server failed to start")
            await self._shutdown(disconnect=connected)
            raise

        self.state = ServerState.RUNNING
        logger.info(f"Server listening on {self.base_url}")

    async def stop(self) -> None:
        if self.state is ServerState.STOPPED:
            return
        if self.state is not ServerState.RUNNING:
            raise ServerStateError(f"Cannot stop server in state {self.state.value}")

        self.state = ServerState.STOPPING
        logger.info("Stopping server")
        await self._shutdown()
        logger.info("Server stopped")

    async def wait(self) -> None:
        """Ожидание завершения листенера (например, по SIGINT)"""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def serve(self, database_url: str) -> None:
        """Точка входа для продакшена: работает, пока uvicorn не завершится"""
        await self.start(database_url)
        try:
            await self.wait()
        finally:
            await self.stop()

    async def _shutdown(self, disconnect: bool = True) -> None:
        try:
            if self._server is not None and self._task is not None:
                self._server.should_exit = True
                if not self._task.done():
                    await self._task
        finally:
            if self._socket is not None:
                self._socket.close()
            self._server = None
            self._task = None
            self._socket = None
            try:
                if disconnect:
                    await self.database.disconnect()
            finally:
                self.state = ServerState.STOPPED
