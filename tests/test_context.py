import asyncio
import threading

import pytest

from dynamic_logging import context
from dynamic_logging.context import context_scope, get_context, request_context


def test_put_and_get():
    assert context.get("tenant") is None

    context.put("tenant", "acme")
    assert context.get("tenant") == "acme"
    assert get_context() == {"tenant": "acme"}


def test_put_all_and_remove():
    context.put_all(tenant="acme", session="s-1")
    assert get_context() == {"tenant": "acme", "session": "s-1"}

    context.remove("session")
    assert get_context() == {"tenant": "acme"}

    context.remove("missing")
    assert get_context() == {"tenant": "acme"}


def test_clear():
    context.put("tenant", "acme")
    context.clear()
    assert get_context() == {}


def test_get_context_is_read_only():
    context.put("tenant", "acme")
    with pytest.raises(TypeError):
        get_context()["tenant"] = "other"


def test_context_scope_restores_previous_values():
    context.put("tenant", "acme")

    with context_scope(tenant="globex", session="s-1") as scoped:
        assert scoped == {"tenant": "globex", "session": "s-1"}
        context.put("extra", "value")

    assert get_context() == {"tenant": "acme"}


def test_request_context_manager():
    with request_context(tenant="acme") as req_id:
        assert len(req_id) == 36  # UUID length
        assert context.get("request_id") == req_id
        assert context.get("tenant") == "acme"

    assert get_context() == {}


def test_request_context_with_explicit_id():
    with request_context(request_id="req-42") as req_id:
        assert req_id == "req-42"
        assert context.get("request_id") == "req-42"


def test_threads_do_not_share_context():
    context.put("tenant", "main")
    seen = {}

    def worker():
        context.put("tenant", "worker")
        seen["after"] = dict(get_context())

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()

    assert seen["after"] == {"tenant": "worker"}
    assert get_context() == {"tenant": "main"}


@pytest.mark.asyncio
async def test_tasks_see_their_own_context():
    async def handle(request_id):
        with request_context(request_id=request_id):
            await asyncio.sleep(0.01)
            return context.get("request_id")

    results = await asyncio.gather(handle("req-1"), handle("req-2"), handle("req-3"))

    assert results == ["req-1", "req-2", "req-3"]
    assert context.get("request_id") is None
