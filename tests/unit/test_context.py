"""Tests for QueryLogContext: scoped updates, restoration and isolation."""

import asyncio
import threading

import pytest

from query_logs.shared.context import QueryLogContext


@pytest.fixture
def context() -> QueryLogContext:
    return QueryLogContext(name="test")


class TestSetContext:
    def test_permanent_update(self, context: QueryLogContext) -> None:
        context.set_context({"job": "Import"})
        assert context.get("job") == "Import"
        assert "job" in context

    def test_unset_key_is_absent(self, context: QueryLogContext) -> None:
        assert context.get("missing") is None
        assert context.get("missing", "default") == "default"
        assert "missing" not in context

    def test_body_result_returned(self, context: QueryLogContext) -> None:
        result = context.set_context({"job": "Import"}, lambda: context.get("job"))
        assert result == "Import"

    def test_body_restores_absent_key(self, context: QueryLogContext) -> None:
        context.set_context({"a": 1}, lambda: None)
        assert "a" not in context

    def test_body_restores_only_updated_keys(self, context: QueryLogContext) -> None:
        """Keys written inside the body but not in the update survive."""

        def body() -> None:
            context.set_context({"b": 2})

        context.set_context({"a": 1}, body)
        assert "a" not in context
        assert context.get("b") == 2

    def test_explicit_none_restored_as_none(self, context: QueryLogContext) -> None:
        """A key explicitly set to None is restored to None, not removed."""
        context.set_context({"a": None})
        context.set_context({"a": 1}, lambda: None)
        assert "a" in context
        assert context.get("a", "absent") is None

    def test_nested_scopes_restore_enclosing_value(self, context: QueryLogContext) -> None:
        seen = []

        def inner() -> None:
            seen.append(context.get("a"))

        def outer() -> None:
            context.set_context({"a": 1}, inner)
            seen.append(context.get("a"))

        context.set_context({"a": 2}, outer)
        assert seen == [1, 2]
        assert "a" not in context

    def test_restored_when_body_raises(self, context: QueryLogContext) -> None:
        context.set_context({"a": "before"})

        def body() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            context.set_context({"a": "during", "b": 1}, body)
        assert context.get("a") == "before"
        assert "b" not in context


class TestScoped:
    def test_with_block(self, context: QueryLogContext) -> None:
        with context.scoped({"path": "/reports"}):
            assert context.get("path") == "/reports"
        assert "path" not in context

    def test_restored_on_error(self, context: QueryLogContext) -> None:
        with pytest.raises(ValueError):
            with context.scoped({"path": "/reports"}):
                raise ValueError("bad")
        assert "path" not in context


class TestSnapshotAndClear:
    def test_snapshot_is_read_only(self, context: QueryLogContext) -> None:
        context.set_context({"a": 1})
        snapshot = context.snapshot()
        with pytest.raises(TypeError):
            snapshot["a"] = 2  # type: ignore[index]

    def test_snapshot_not_affected_by_later_writes(self, context: QueryLogContext) -> None:
        context.set_context({"a": 1})
        snapshot = context.snapshot()
        context.set_context({"a": 2})
        assert snapshot["a"] == 1

    def test_clear(self, context: QueryLogContext) -> None:
        context.set_context({"a": 1, "b": 2})
        context.clear()
        assert dict(context.snapshot()) == {}


class TestCacheSlot:
    def test_cache_bound_to_configuration(self, context: QueryLogContext) -> None:
        config_a, config_b = object(), object()
        context.store_comment(config_a, "/*a:1*/")
        assert context.cached_comment(config_a).comment == "/*a:1*/"
        assert context.cached_comment(config_b) is None

    def test_absent_comment_is_cached(self, context: QueryLogContext) -> None:
        config = object()
        context.store_comment(config, None)
        cached = context.cached_comment(config)
        assert cached is not None
        assert cached.comment is None

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda c: c.set_context({"a": 1}),
            lambda c: c.set_context({"a": 1}, lambda: None),
            lambda c: c.clear(),
        ],
    )
    def test_mutation_invalidates(self, context: QueryLogContext, mutate) -> None:
        config = object()
        context.store_comment(config, "/*a:0*/")
        mutate(context)
        assert context.cached_comment(config) is None


class TestIsolation:
    async def test_tasks_do_not_share_context(self, context: QueryLogContext) -> None:
        async def worker(name: str) -> str:
            context.set_context({"job": name})
            await asyncio.sleep(0)
            return context.get("job")

        results = await asyncio.gather(worker("a"), worker("b"))
        assert results == ["a", "b"]
        assert "job" not in context

    async def test_child_task_inherits_but_does_not_leak(self, context: QueryLogContext) -> None:
        context.set_context({"job": "parent"})

        async def child() -> str:
            inherited = context.get("job")
            context.set_context({"job": "child"})
            return inherited

        assert await asyncio.create_task(child()) == "parent"
        assert context.get("job") == "parent"

    def test_threads_do_not_share_writes(self, context: QueryLogContext) -> None:
        context.set_context({"job": "main"})
        seen = {}

        def worker() -> None:
            context.set_context({"job": "thread"})
            seen["job"] = context.get("job")

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        assert seen["job"] == "thread"
        assert context.get("job") == "main"
