import asyncio

from memo_api_client import ApiError, Memo
from memo_store import HISTORY_LIMIT, MemoStore, OperationKind, OperationStatus, TITLE_REQUIRED_MESSAGE


class FakeMemoAPI:
    """In-memory stand-in for MemoAPI.

    A call whose name is in ``gates`` waits until the test sets that
    event; a call whose name is in ``failures`` raises that error.
    """

    def __init__(self, memos=None):
        self.server_memos = list(memos or [])
        self.calls = []
        self.gates = {}
        self.failures = {}
        self.next_id = 42

    async def _respond(self, name):
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        error = self.failures.get(name)
        if error is not None:
            raise error

    async def list_memos(self):
        self.calls.append(("list",))
        await self._respond("list")
        return list(self.server_memos)

    async def create_memo(self, title, content):
        self.calls.append(("create", title, content))
        await self._respond("create")
        memo = Memo(id=self.next_id, title=title, content=content, author_id=1)
        self.next_id += 1
        self.server_memos.insert(0, memo)
        return memo

    async def delete_memo(self, memo_id):
        self.calls.append(("delete", memo_id))
        await self._respond("delete")
        self.server_memos = [m for m in self.server_memos if m.id != memo_id]


M1 = Memo(id=1, title="one", content="first", author_id=1)
M2 = Memo(id=2, title="two", content="second", author_id=1)


async def loaded_store(api):
    store = MemoStore(api)
    await store.load()
    return store


def test_load_replaces_list():
    api = FakeMemoAPI([M2, M1])

    store = asyncio.run(loaded_store(api))

    assert store.memos == [M2, M1]
    assert not store.is_loading


def test_load_failure_keeps_list_and_sets_message():
    async def scenario():
        api = FakeMemoAPI([M1, M2])
        store = await loaded_store(api)
        api.failures["list"] = ApiError("Server error: 500 Internal Server Error", 500)
        await store.load()
        return store

    store = asyncio.run(scenario())

    assert store.memos == [M1, M2]
    assert store.message == "Server error: 500 Internal Server Error"


def test_loading_flag_while_in_flight():
    async def scenario():
        api = FakeMemoAPI([M1])
        api.gates["list"] = asyncio.Event()
        store = MemoStore(api)
        task = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        during = store.is_loading
        api.gates["list"].set()
        await task
        return during, store.is_loading

    assert asyncio.run(scenario()) == (True, False)


def test_delete_failure_restores_original_order():
    async def scenario():
        api = FakeMemoAPI([M1, M2])
        store = await loaded_store(api)
        api.gates["delete"] = asyncio.Event()
        api.failures["delete"] = ApiError("Memo not found or you do not have permission to modify it", 404)

        task = asyncio.create_task(store.delete(M1.id))
        await asyncio.sleep(0)
        transient = store.memos
        deleting = store.is_deleting
        api.gates["delete"].set()
        op = await task
        return store, transient, deleting, op

    store, transient, deleting, op = asyncio.run(scenario())

    assert transient == [M2]
    assert deleting is True
    assert store.memos == [M1, M2]
    assert op.status is OperationStatus.REVERTED
    assert store.message == "Memo not found or you do not have permission to modify it"
    assert not store.is_deleting


def test_delete_success_keeps_memo_removed():
    async def scenario():
        api = FakeMemoAPI([M1, M2])
        store = await loaded_store(api)
        op = await store.delete(M1.id)
        return store, op, api

    store, op, api = asyncio.run(scenario())

    assert store.memos == [M2]
    assert op.status is OperationStatus.CONFIRMED
    assert ("delete", 1) in api.calls
    assert store.message == "Memo deleted"


def test_create_confirm_replaces_provisional_memo():
    async def scenario():
        api = FakeMemoAPI()
        store = MemoStore(api)
        api.gates["create"] = asyncio.Event()

        task = asyncio.create_task(store.create("T", "C"))
        await asyncio.sleep(0)
        transient = store.memos
        api.gates["create"].set()
        op = await task
        return store, transient, op

    store, transient, op = asyncio.run(scenario())

    assert len(transient) == 1
    assert transient[0].id < 0
    assert transient[0].is_provisional
    assert (transient[0].title, transient[0].content) == ("T", "C")

    assert store.memos == [Memo(id=42, title="T", content="C", author_id=1)]
    assert op.status is OperationStatus.CONFIRMED
    assert op.result.id == 42
    assert store.message == "Memo created"


def test_create_keeps_position_of_confirmed_memo():
    async def scenario():
        api = FakeMemoAPI([M1, M2])
        store = await loaded_store(api)
        await store.create("T", "C")
        return store

    store = asyncio.run(scenario())

    assert [m.id for m in store.memos] == [42, 1, 2]


def test_create_failure_reverts_to_snapshot():
    async def scenario():
        api = FakeMemoAPI([M1])
        store = await loaded_store(api)
        api.failures["create"] = ApiError("Server error: 503 Service Unavailable", 503)
        op = await store.create("T", "C")
        return store, op

    store, op = asyncio.run(scenario())

    assert store.memos == [M1]
    assert op.status is OperationStatus.REVERTED
    assert op.error == "Server error: 503 Service Unavailable"
    assert store.message == "Server error: 503 Service Unavailable"


def test_empty_title_sends_nothing():
    async def scenario():
        api = FakeMemoAPI([M1])
        store = await loaded_store(api)
        calls_before = list(api.calls)
        result = await store.create("", "C")
        return store, api, calls_before, result

    store, api, calls_before, result = asyncio.run(scenario())

    assert result is None
    assert api.calls == calls_before
    assert store.memos == [M1]
    assert store.message == TITLE_REQUIRED_MESSAGE
    assert store.operations == []


def test_draft_is_cleared_before_request_completes():
    async def scenario():
        api = FakeMemoAPI()
        store = MemoStore(api)
        store.draft.title = "T"
        store.draft.content = "C"
        api.gates["create"] = asyncio.Event()

        task = asyncio.create_task(store.submit_draft())
        await asyncio.sleep(0)
        draft = (store.draft.title, store.draft.content, store.is_creating)
        api.gates["create"].set()
        await task
        return store, api, draft

    store, api, draft = asyncio.run(scenario())

    assert draft == ("", "", True)
    assert api.calls == [("create", "T", "C")]
    assert not store.is_creating


def test_temporary_ids_are_distinct_and_negative():
    async def scenario():
        api = FakeMemoAPI()
        store = MemoStore(api)
        api.gates["create"] = asyncio.Event()
        tasks = [asyncio.create_task(store.create(f"memo {i}")) for i in range(3)]
        await asyncio.sleep(0)
        provisional = [m.id for m in store.memos]
        api.gates["create"].set()
        await asyncio.gather(*tasks)
        return store, provisional

    store, provisional = asyncio.run(scenario())

    assert len(set(provisional)) == 3
    assert all(i < 0 for i in provisional)
    assert sorted(m.id for m in store.memos) == [42, 43, 44]


def test_failed_delete_does_not_clobber_concurrent_create():
    """A revert after another operation changed the list only undoes its
    own change"""

    async def scenario():
        api = FakeMemoAPI([M1, M2])
        store = await loaded_store(api)
        api.gates["delete"] = asyncio.Event()
        api.gates["create"] = asyncio.Event()
        api.failures["delete"] = ApiError("boom", 500)

        delete_task = asyncio.create_task(store.delete(M1.id))
        await asyncio.sleep(0)
        create_task = asyncio.create_task(store.create("N", ""))
        await asyncio.sleep(0)

        api.gates["delete"].set()
        delete_op = await delete_task
        after_revert = [m.id for m in store.memos]

        api.gates["create"].set()
        create_op = await create_task
        return store, delete_op, create_op, after_revert

    store, delete_op, create_op, after_revert = asyncio.run(scenario())

    assert delete_op.status is OperationStatus.REVERTED
    assert create_op.status is OperationStatus.CONFIRMED
    assert after_revert[0] == M1.id
    assert after_revert[1] < 0
    assert after_revert[2] == M2.id
    assert [m.id for m in store.memos] == [1, 42, 2]


def test_history_keeps_pending_and_recent_operations():
    async def scenario():
        api = FakeMemoAPI([M1])
        store = await loaded_store(api)
        api.gates["delete"] = asyncio.Event()
        pending_delete = asyncio.create_task(store.delete(M1.id))
        await asyncio.sleep(0)
        for n in range(HISTORY_LIMIT + 5):
            await store.create(f"memo {n}")
        during = list(store.operations)
        first_status = during[0].status
        api.gates["delete"].set()
        await pending_delete
        return store, during, first_status

    store, during, first_status = asyncio.run(scenario())

    assert len(during) == HISTORY_LIMIT + 1
    assert during[0].kind is OperationKind.DELETE
    assert first_status is OperationStatus.PENDING
    assert [op.memo_id for op in during[1:]] == sorted((op.memo_id for op in during[1:]), reverse=True)
    assert len(store.operations) == HISTORY_LIMIT
    assert store.operations[0].status is OperationStatus.CONFIRMED
    assert during[1] not in store.operations
