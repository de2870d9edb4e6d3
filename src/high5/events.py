"""Event triggers and handler compilation.

A handler compiled from an `EventDescriptor` always runs its effects in the
same order: suppress the default action, merge state updates (which
re-renders the mounted tree), then emit to the host.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias, cast

from high5.nodes import CurrentFieldChecked, CurrentFieldValue, EventDescriptor
from high5.state import StateStore

EventChannel: TypeAlias = Callable[[str, dict[str, Any]], None]
"""Host callback: `on_event(event_name, payload)`."""


@dataclass(slots=True)
class EventTrigger:
	"""Runtime payload of one user interaction.

	`value` and `checked` mirror the triggering field. `prevent_default` marks
	the host's default behaviour (e.g. form navigation) as suppressed; the host
	reads `default_prevented` after dispatch.
	"""

	value: Any = None
	checked: bool | None = None
	default_prevented: bool = False

	def prevent_default(self) -> None:
		self.default_prevented = True

	@staticmethod
	def of(raw: Any) -> EventTrigger:
		"""Build a trigger from what a host sends over the wire.

		Accepts an existing trigger, `None`, a `{"value", "checked"}` mapping,
		a DOM-like `{"target": {"value", "checked"}}` mapping, or a bare value.
		"""
		if isinstance(raw, EventTrigger):
			return raw
		if raw is None:
			return EventTrigger()
		if isinstance(raw, Mapping):
			raw = cast(Mapping[str, Any], raw)
			target = raw.get("target")
			source = cast(Mapping[str, Any], target) if isinstance(target, Mapping) else raw
			checked = source.get("checked")
			return EventTrigger(
				value=source.get("value"),
				checked=bool(checked) if checked is not None else None,
			)
		return EventTrigger(value=raw)


Handler: TypeAlias = Callable[[EventTrigger], None]


def resolve_template(value: Any, trigger: EventTrigger) -> Any:
	match value:
		case CurrentFieldValue():
			return trigger.value
		case CurrentFieldChecked():
			return trigger.checked
		case _:
			return value


def compile_handler(
	descriptor: EventDescriptor,
	store: StateStore,
	emit: EventChannel | None,
) -> Handler:
	state_updates = descriptor.state_updates
	emit_event = descriptor.emit_event
	data = dict(descriptor.data or {})
	suppress = descriptor.suppresses_default

	def handler(trigger: EventTrigger) -> None:
		if suppress:
			trigger.prevent_default()
		if state_updates:
			store.merge(
				{key: resolve_template(value, trigger) for key, value in state_updates.items()}
			)
		if emit_event is not None and emit is not None:
			emit(emit_event, {**data, "state": store.snapshot()})

	return handler


__all__ = [
	"EventChannel",
	"EventTrigger",
	"Handler",
	"compile_handler",
	"resolve_template",
]
