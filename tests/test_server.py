"""
Tests for the server lifecycle manager.
"""

import socket

import httpx
import pytest

from blog_api.config import settings
from blog_api.main import create_app
from blog_api.server import Server, ServerState, ServerStateError


async def test_start_and_stop():
    server = Server()
    assert server.state is ServerState.STOPPED

    await server.start(settings.test_database_url, host="127.0.0.1", port=0)
    try:
        assert server.state is ServerState.RUNNING
        assert server.database.is_connected
        assert server.port

        async with httpx.AsyncClient(base_url=server.base_url, trust_env=False) as client:
            res = await client.get("/health")
        assert res.status_code == 200
    finally:
        await server.stop()

    assert server.state is ServerState.STOPPED
    assert not server.database.is_connected
    assert server.port is None


async def test_start_twice_is_an_error(server):
    with pytest.raises(ServerStateError):
        await server.start(settings.test_database_url, host="127.0.0.1", port=0)
    assert server.state is ServerState.RUNNING


async def test_stop_while_stopped_is_noop():
    server = Server()
    await server.stop()
    assert server.state is ServerState.STOPPED


async def test_restart_after_stop(server):
    await server.stop()
    await server.start(settings.test_database_url, host="127.0.0.1", port=0)
    assert server.state is ServerState.RUNNING


async def test_failed_start_returns_to_stopped():
    server = Server()
    with pytest.raises(Exception):
        await server.start("sqlite+aiosqlite:////nonexistent-dir/blog.db", host="127.0.0.1", port=0)

    assert server.state is ServerState.STOPPED
    assert not server.database.is_connected


def test_base_url_requires_running_server():
    with pytest.raises(ServerStateError):
        Server().base_url


async def test_unconnected_database_is_generic_500():
    from blog_api.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        res = await client.get("/posts")

    assert res.status_code == 500
    assert res.json() == {"detail": "Internal server error"}


def test_each_server_binds_its_own_database():
    first, second = Server(), Server()

    assert first.app.state.database is first.database
    assert second.app.state.database is second.database
    assert first.database is not second.database


def test_server_adopts_app_database():
    app = create_app()
    assert Server(app=app).database is app.state.database


async def test_failed_sibling_start_keeps_running_server(server):
    sibling = Server()
    with pytest.raises(Exception):
        await sibling.start("sqlite+aiosqlite:////nonexistent-dir/blog.db", host="127.0.0.1", port=0)

    assert sibling.state is ServerState.STOPPED
    assert server.database.is_connected
    async with httpx.AsyncClient(base_url=server.base_url, trust_env=False) as client:
        res = await client.get("/posts")
    assert res.status_code == 200


async def test_start_on_connected_database_leaves_it_connected(server):
    sibling = Server(database=server.database)
    with pytest.raises(RuntimeError):
        await sibling.start(settings.test_database_url, host="127.0.0.1", port=0)

    assert sibling.state is ServerState.STOPPED
    assert server.database.is_connected


async def test_port_in_use_fails_cleanly():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        port = blocker.getsockname()[1]

        server = Server()
        with pytest.raises(OSError):
            await server.start(settings.test_database_url, host="127.0.0.1", port=port)

    assert server.state is ServerState.STOPPED
    assert not server.database.is_connected
    assert server.port is None
