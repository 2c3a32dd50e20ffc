"""Unit tests for the startup database bootstrap."""

import asyncpg
import pytest

from fleet_api.config import Settings
from fleet_api.infrastructure.database import ensure_database


class FakeConnection:
    def __init__(self, exists: bool):
        self.exists = exists
        self.executed: list[str] = []
        self.closed = False

    async def fetchval(self, query: str, *args):
        return 1 if self.exists else None

    async def execute(self, query: str):
        self.executed.append(query)

    async def close(self):
        self.closed = True


@pytest.fixture
def connect_calls(monkeypatch):
    calls: list[str] = []
    state = {"connection": FakeConnection(exists=False)}

    async def fake_connect(dsn):
        calls.append(dsn)
        return state["connection"]

    monkeypatch.setattr(asyncpg, "connect", fake_connect)
    return calls, state


@pytest.mark.asyncio
async def test_sqlite_needs_no_bootstrap(connect_calls):
    calls, _ = connect_calls

    await ensure_database(Settings(database_url="sqlite:///./fleet.db"))

    assert calls == []


@pytest.mark.asyncio
async def test_missing_postgres_database_is_created(connect_calls):
    calls, state = connect_calls

    await ensure_database(Settings(database_url="postgresql://fleet:secret@db:5432/fleet"))

    assert calls == ["postgresql://fleet:secret@db:5432/postgres"]
    assert state["connection"].executed == ['CREATE DATABASE "fleet"']
    assert state["connection"].closed


@pytest.mark.asyncio
async def test_existing_postgres_database_is_left_alone(connect_calls):
    _, state = connect_calls
    state["connection"] = FakeConnection(exists=True)

    await ensure_database(Settings(database_url="postgresql+asyncpg://fleet@db/fleet"))

    assert state["connection"].executed == []
    assert state["connection"].closed


@pytest.mark.asyncio
async def test_database_name_is_quoted(connect_calls):
    _, state = connect_calls

    await ensure_database(Settings(database_url='postgresql://fleet@db/odd"name'))

    assert state["connection"].executed == ['CREATE DATABASE "odd""name"']


@pytest.mark.asyncio
async def test_unreachable_server_does_not_block_startup(monkeypatch):
    async def refuse(dsn):
        raise ConnectionRefusedError("db:5432")

    monkeypatch.setattr(asyncpg, "connect", refuse)

    await ensure_database(Settings(database_url="postgresql://fleet@db/fleet"))
