from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

StateListener = Callable[[dict[str, Any]], None]


class StateStore:
	"""Flat key/value state for one mounted definition tree.

	`merge` is the only mutator: each key in the update replaces the previous
	value wholesale. There are no nested paths, transactions or rollback.
	Listeners run synchronously after every merge with the changed keys.
	"""

	__slots__ = ("_values", "_listeners")  # pyright: ignore[reportUnannotatedClassAttribute]
	_values: dict[str, Any]
	_listeners: list[StateListener]

	def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
		self._values = dict(initial) if initial else {}
		self._listeners = []

	def get(self, key: str) -> Any | None:
		return self._values.get(key)

	def merge(self, partial: Mapping[str, Any]) -> None:
		if not partial:
			return
		changes = dict(partial)
		self._values.update(changes)
		for listener in list(self._listeners):
			listener(changes)

	def snapshot(self) -> dict[str, Any]:
		return dict(self._values)

	def subscribe(self, listener: StateListener) -> Callable[[], None]:
		self._listeners.append(listener)

		def unsubscribe() -> None:
			try:
				self._listeners.remove(listener)
			except ValueError:
				pass

		return unsubscribe

	def dispose(self) -> None:
		self._listeners.clear()
		self._values.clear()

	def __contains__(self, key: object) -> bool:
		return key in self._values

	def __len__(self) -> int:
		return len(self._values)

	def __iter__(self) -> Iterator[str]:
		return iter(self._values)

	def __repr__(self) -> str:
		return f"StateStore({self._values!r})"


__all__ = ["StateListener", "StateStore"]
