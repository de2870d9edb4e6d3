from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from high5.errors import Errors
from high5.events import EventChannel, EventTrigger
from high5.legacy import LegacyRenderer
from high5.nodes import LegacyDefinition, RenderableDefinition, ServerRendered, Single, parse_definition
from high5.renderer import Callback, Callbacks, Renderer
from high5.state import StateStore
from high5.vdom import VDOM

logger = logging.getLogger(__name__)


def new_mount_id() -> str:
	return uuid.uuid4().hex


class Mount:
	"""A definition mounted against its own state store.

	Any state change re-renders the whole tree synchronously, so `vdom` and
	`callbacks` always reflect the latest store snapshot.
	"""

	id: str
	definition: RenderableDefinition | None
	store: StateStore
	errors: Errors
	vdom: VDOM
	callbacks: Callbacks
	render_count: int
	mounted: bool

	def __init__(
		self,
		definition: RenderableDefinition | None,
		on_event: EventChannel | None = None,
		*,
		errors: Errors | None = None,
		mount_id: str | None = None,
	) -> None:
		self.id = mount_id or new_mount_id()
		self.definition = definition
		self.on_event = on_event
		self.errors = errors if errors is not None else Errors(self.id)
		self.store = StateStore()
		self.vdom = None
		self.callbacks = {}
		self.render_count = 0
		self.mounted = True
		self._unsubscribe = self.store.subscribe(self._on_state_change)
		self.render()

	def render(self) -> VDOM:
		match self.definition:
			case ServerRendered(root):
				renderer = Renderer(self.store, self._emit, self.errors)
				vdom = renderer.render_tree(Single(root))
				callbacks = renderer.callbacks
			case LegacyDefinition() as legacy:
				legacy_renderer = LegacyRenderer(self.store, self._emit, self.errors)
				vdom = legacy_renderer.render(legacy)
				callbacks = legacy_renderer.callbacks
			case None:
				vdom = None
				callbacks = {}
		self.vdom = vdom
		self.callbacks = callbacks
		self.render_count += 1
		return vdom

	def invoke(self, key: str, trigger: Any = None) -> EventTrigger | None:
		"""Run the callback registered under `key`.

		Returns the trigger so the host can check `default_prevented`, or None
		if no such callback exists. Handler failures are reported, never
		raised.
		"""
		callback = self.callbacks.get(key)
		if callback is None:
			self.errors.report(
				"event.unknown_callback",
				f"No callback registered under {key!r}",
				details={"key": key},
			)
			return None
		event_trigger = EventTrigger.of(trigger)
		try:
			callback.fn(event_trigger)
		except Exception as exc:
			self.errors.report(
				"event.handler",
				f"Handler {key!r} raised {type(exc).__name__}",
				details={"key": key},
				exc=exc,
			)
		return event_trigger

	def find_callback(
		self,
		tag: str | None = None,
		event_name: str | None = None,
		predicate: Callable[[Mapping[str, Any]], bool] | None = None,
	) -> str | None:
		"""Key of the first callback (in render order) matching all filters."""
		for key, callback in self.callbacks.items():
			if matches(callback, tag, event_name, predicate):
				return key
		return None

	def unmount(self) -> None:
		if not self.mounted:
			return
		self.mounted = False
		self._unsubscribe()
		self.store.dispose()
		self.callbacks = {}
		self.vdom = None

	def _on_state_change(self, changes: dict[str, Any]) -> None:
		if self.mounted:
			logger.debug("Re-rendering mount %s after update of %s", self.id, list(changes))
			self.render()

	def _emit(self, event_name: str, payload: dict[str, Any]) -> None:
		if self.on_event is not None and self.mounted:
			self.on_event(event_name, payload)


def matches(
	callback: Callback,
	tag: str | None,
	event_name: str | None,
	predicate: Callable[[Mapping[str, Any]], bool] | None,
) -> bool:
	if tag is not None and callback.tag != tag:
		return False
	if event_name is not None and callback.event != event_name:
		return False
	return predicate is None or predicate(callback.props)


class Interpreter:
	"""Owns the currently mounted definition, if any.

	Mounting replaces the previous tree: its store is discarded and its
	callbacks stop working.
	"""

	on_event: EventChannel | None
	current: Mount | None

	def __init__(self, on_event: EventChannel | None = None) -> None:
		self.on_event = on_event
		self.current = None

	def mount(self, definition: Any) -> Mount | None:
		self.unmount()
		if definition is None:
			return None
		mount_id = new_mount_id()
		errors = Errors(mount_id)
		parsed = parse_definition(definition, errors=errors)
		# Malformed payloads still mount, as an empty tree carrying the diagnostic
		self.current = Mount(parsed, self.on_event, errors=errors, mount_id=mount_id)
		return self.current

	def unmount(self) -> None:
		if self.current is not None:
			self.current.unmount()
			self.current = None


__all__ = ["Interpreter", "Mount", "matches", "new_mount_id"]
