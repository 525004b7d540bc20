"""
Unit tests for the session bridge service.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from sharedsession.config.provider import SessionOptions
from sharedsession.modules.api.models import SessionKeyJsonValue
from sharedsession.modules.bridge import DistributedCacheSessionService, generate_session_key
from sharedsession.modules.errors import (
    InvalidArgumentError,
    StoreFailureError,
    ValueParseError,
)
from sharedsession.modules.store import DistributedSessionStore
from sharedsession.modules.store.serialization import serialize


def _values(**documents):
    return [SessionKeyJsonValue(key=name, json_value=doc) for name, doc in documents.items()]


def _as_dict(values):
    return {value.key: value.json_value for value in values}


def test_generate_session_key_is_uuid_text():
    keys = {generate_session_key() for _ in range(100)}

    assert len(keys) == 100
    for key in keys:
        assert len(key) == 36
        assert str(uuid.UUID(key)) == key


@pytest.mark.asyncio
async def test_create_then_get_returns_values(session_service):
    values = _values(user={"name": "Ada"}, cart={"items": [1, 2, 3]})

    key = await session_service.create(values)
    result = await session_service.get(key)

    assert _as_dict(result) == _as_dict(values)


@pytest.mark.asyncio
async def test_create_with_duplicate_names_keeps_last(session_service):
    values = [
        SessionKeyJsonValue(key="user", json_value={"v": 1}),
        SessionKeyJsonValue(key="user", json_value={"v": 2}),
    ]

    key = await session_service.create(values)

    assert _as_dict(await session_service.get(key)) == {"user": {"v": 2}}


@pytest.mark.asyncio
async def test_create_returns_fresh_keys(session_service):
    values = _values(a={"x": 1})
    assert await session_service.create(values) != await session_service.create(values)


@pytest.mark.asyncio
async def test_create_rejects_none(session_service):
    with pytest.raises(InvalidArgumentError):
        await session_service.create(None)


@pytest.mark.asyncio
async def test_create_with_no_values_is_not_found_afterwards(session_service):
    """A session without entries cannot be told apart from a missing one."""
    key = await session_service.create([])
    assert await session_service.get(key) is None


@pytest.mark.asyncio
async def test_get_unknown_key_returns_none(session_service):
    assert await session_service.get(generate_session_key()) is None


@pytest.mark.asyncio
async def test_get_fails_on_malformed_entry(session_service, memory_cache):
    memory_cache_key = "broken"
    await memory_cache.set(
        memory_cache_key, serialize({"good": b'{"a":1}', "bad": b"not json"}), 60
    )

    with pytest.raises(ValueParseError):
        await session_service.get(memory_cache_key)


@pytest.mark.asyncio
async def test_save_unknown_key_is_noop(session_service):
    key = generate_session_key()

    await session_service.save(key, _values(a={"x": 1}))

    assert await session_service.get(key) is None


@pytest.mark.asyncio
async def test_save_merges_values(session_service):
    key = await session_service.create(_values(a={"v": 1}, b={"v": 2}))

    await session_service.save(key, _values(b={"v": 20}, c={"v": 3}))

    assert _as_dict(await session_service.get(key)) == {
        "a": {"v": 1},
        "b": {"v": 20},
        "c": {"v": 3},
    }


@pytest.mark.asyncio
async def test_save_rejects_none(session_service):
    key = await session_service.create(_values(a={"v": 1}))
    with pytest.raises(InvalidArgumentError):
        await session_service.save(key, None)


@pytest.mark.asyncio
async def test_delete_removes_session(session_service, memory_cache):
    key = await session_service.create(_values(a={"v": 1}))

    await session_service.delete(key)

    assert await session_service.get(key) is None
    assert len(memory_cache) == 0


@pytest.mark.asyncio
async def test_delete_unknown_key_succeeds(session_service):
    key = generate_session_key()

    await session_service.delete(key)

    assert await session_service.get(key) is None


@pytest.mark.asyncio
async def test_get_rejects_empty_key(session_service):
    with pytest.raises(InvalidArgumentError):
        await session_service.get("")


@pytest.mark.asyncio
async def test_store_failure_propagates():
    cache = AsyncMock()
    cache.get = AsyncMock(side_effect=ConnectionError("down"))
    service = DistributedCacheSessionService(
        DistributedSessionStore(cache), cache, SessionOptions()
    )

    with pytest.raises(StoreFailureError):
        await service.get("some-key")


@pytest.mark.asyncio
async def test_sessions_use_configured_timeouts():
    session = MagicMock()
    session.keys = []
    session.load = AsyncMock()
    store = MagicMock()
    store.create = MagicMock(return_value=session)

    service = DistributedCacheSessionService(
        store, AsyncMock(), SessionOptions(idle_timeout=300, io_timeout=7)
    )
    await service.get("abc")

    args = store.create.call_args[0]
    assert args[0] == "abc"
    assert args[1] == 300
    assert args[2] == 7
    assert args[3]() is True
    assert args[4] is False


def test_constructor_rejects_missing_collaborators(session_store, memory_cache):
    with pytest.raises(InvalidArgumentError):
        DistributedCacheSessionService(None, memory_cache, SessionOptions())
    with pytest.raises(InvalidArgumentError):
        DistributedCacheSessionService(session_store, None, SessionOptions())
    with pytest.raises(InvalidArgumentError):
        DistributedCacheSessionService(session_store, memory_cache, None)
