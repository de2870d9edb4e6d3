from typing import Any

from high5.state import StateStore


def test_get_missing_key_is_none():
	store = StateStore()
	assert store.get("missing") is None
	assert "missing" not in store


def test_merge_is_shallow_overwrite():
	store = StateStore({"a": {"x": 1}, "b": 2})
	store.merge({"a": {"y": 2}})
	assert store.snapshot() == {"a": {"y": 2}, "b": 2}
	assert len(store) == 2


def test_snapshot_is_a_copy():
	store = StateStore({"a": 1})
	snap = store.snapshot()
	snap["a"] = 99
	assert store.get("a") == 1


def test_listeners_receive_changes_and_can_unsubscribe():
	store = StateStore()
	seen: list[dict[str, Any]] = []
	unsubscribe = store.subscribe(seen.append)

	store.merge({"a": 1})
	store.merge({})
	unsubscribe()
	store.merge({"b": 2})

	assert seen == [{"a": 1}]


def test_dispose_clears_values_and_listeners():
	store = StateStore({"a": 1})
	seen: list[dict[str, Any]] = []
	store.subscribe(seen.append)
	store.dispose()
	store.merge({"b": 2})
	assert seen == []
	assert store.snapshot() == {"b": 2}
