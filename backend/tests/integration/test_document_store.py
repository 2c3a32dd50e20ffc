"""Integration tests for the SQLAlchemy document store on SQLite."""

import pytest

from fleet_api.domain.entities import EntityKey, EqualityFilter, Kind
from fleet_api.domain.exceptions import InvalidCursorError
from fleet_api.infrastructure.database.repositories.document_store import encode_cursor


@pytest.mark.asyncio
async def test_put_assigns_increasing_ids(document_store):
    first = await document_store.put(EntityKey.incomplete(Kind.BOAT), {"name": "A"})
    second = await document_store.put(EntityKey.incomplete(Kind.BOAT), {"name": "B"})

    assert first.is_complete and second.is_complete
    assert second.id > first.id
    assert (await document_store.get(first)).data == {"name": "A"}


@pytest.mark.asyncio
async def test_put_to_existing_key_overwrites(document_store):
    key = await document_store.put(EntityKey.incomplete(Kind.LOAD), {"volume": 1})

    same = await document_store.put(key, {"volume": 2})

    assert same == key
    assert (await document_store.get(key)).data == {"volume": 2}


@pytest.mark.asyncio
async def test_named_key_upserts(document_store):
    key = EntityKey.named(Kind.USER, "auth0|alice")
    await document_store.put(key, {"sub": "auth0|alice"})
    await document_store.put(key, {"sub": "auth0|alice"})

    page = await document_store.query(Kind.USER, limit=10)

    assert len(page.items) == 1
    assert page.items[0].id == "auth0|alice"


@pytest.mark.asyncio
async def test_get_and_delete_missing(document_store):
    missing = EntityKey.numeric(Kind.BOAT, 424242)
    assert await document_store.get(missing) is None
    assert await document_store.delete(missing) is False


@pytest.mark.asyncio
async def test_delete_removes_document(document_store):
    key = await document_store.put(EntityKey.incomplete(Kind.BOAT), {"name": "A"})

    assert await document_store.delete(key) is True
    assert await document_store.get(key) is None


@pytest.mark.asyncio
async def test_kinds_do_not_share_keys(document_store):
    key = await document_store.put(EntityKey.incomplete(Kind.BOAT), {"name": "A"})
    assert await document_store.get(EntityKey.numeric(Kind.LOAD, key.id)) is None


@pytest.mark.asyncio
async def test_query_pages_are_complete_and_disjoint(document_store):
    keys = [await document_store.put(EntityKey.incomplete(Kind.BOAT), {"n": i}) for i in range(12)]
    await document_store.put(EntityKey.incomplete(Kind.LOAD), {"n": 99})

    seen = []
    sizes = []
    cursor = None
    while True:
        page = await document_store.query(Kind.BOAT, limit=5, cursor=cursor)
        sizes.append(len(page.items))
        seen.extend(d.id for d in page.items)
        if page.is_last:
            break
        cursor = page.cursor

    assert sizes == [5, 5, 2]
    assert seen == [k.id for k in keys]


@pytest.mark.asyncio
async def test_exact_multiple_of_page_size_has_no_trailing_cursor(document_store):
    for i in range(5):
        await document_store.put(EntityKey.incomplete(Kind.BOAT), {"n": i})

    page = await document_store.query(Kind.BOAT, limit=5)

    assert len(page.items) == 5
    assert page.cursor is None


@pytest.mark.asyncio
async def test_query_equality_filter(document_store):
    for owner in ("alice", "bob", "alice"):
        await document_store.put(EntityKey.incomplete(Kind.BOAT), {"user": owner})

    page = await document_store.query(Kind.BOAT, equality=EqualityFilter("user", "alice"), limit=5)

    assert [d.owner for d in page.items] == ["alice", "alice"]


@pytest.mark.asyncio
async def test_query_dotted_equality_filter(document_store):
    await document_store.put(EntityKey.incomplete(Kind.LOAD), {"carrier": {"id": 3, "kind": "Boat"}})
    await document_store.put(EntityKey.incomplete(Kind.LOAD), {"carrier": {"id": 4, "kind": "Boat"}})
    await document_store.put(EntityKey.incomplete(Kind.LOAD), {"carrier": None})

    page = await document_store.query(Kind.LOAD, equality=EqualityFilter("carrier.id", 3), limit=5)

    assert len(page.items) == 1
    assert page.items[0].data["carrier"]["id"] == 3


@pytest.mark.asyncio
async def test_invalid_cursor_is_rejected(document_store):
    with pytest.raises(InvalidCursorError):
        await document_store.query(Kind.BOAT, limit=5, cursor="not-a-cursor")


@pytest.mark.asyncio
@pytest.mark.parametrize("after", [-1, 10**30])
async def test_cursor_outside_id_range_is_rejected(document_store, after):
    with pytest.raises(InvalidCursorError):
        await document_store.query(Kind.BOAT, limit=5, cursor=encode_cursor(after))


@pytest.mark.asyncio
async def test_transaction_commit_persists(document_store):
    key = EntityKey.named(Kind.COUNTER, "Boat")
    async with document_store.transaction() as tx:
        assert await tx.get(key) is None
        await tx.save(key, {"total": 1, "owners": {"alice": 1}})
        await tx.commit()

    assert (await document_store.get(key)).data == {"total": 1, "owners": {"alice": 1}}


@pytest.mark.asyncio
async def test_transaction_without_commit_rolls_back(document_store):
    key = EntityKey.named(Kind.COUNTER, "Load")
    await document_store.put(key, {"total": 0, "owners": {}})

    async with document_store.transaction() as tx:
        await tx.save(key, {"total": 5, "owners": {}})

    assert (await document_store.get(key)).data == {"total": 0, "owners": {}}


@pytest.mark.asyncio
async def test_exception_inside_transaction_rolls_back(document_store):
    key = EntityKey.named(Kind.COUNTER, "Boat")

    with pytest.raises(RuntimeError):
        async with document_store.transaction() as tx:
            await tx.save(key, {"total": 9, "owners": {}})
            raise RuntimeError("abort")

    assert await document_store.get(key) is None
