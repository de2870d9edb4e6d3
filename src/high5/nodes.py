"""Definition model: the nodes a UI definition tree is made of.

Definitions arrive as JSON (see `high5.vdom`) and are parsed into immutable
dataclasses. Parsing is tolerant: malformed pieces are reported and degraded,
never raised, because a broken definition must still leave the rest of the
tree renderable.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias, cast

from high5.errors import Errors
from high5.vdom import (
	RENDER_TYPE_SERVER,
	ChildrenJson,
	EventDescriptorJson,
	JsonValue,
	NodeJson,
	ServerRenderedEnvelope,
	TemplateRefJson,
)

# Definitions deeper than this are cut off. JSON payloads cannot be cyclic, but
# Python dicts handed to `parse_node` can.
MAX_DEPTH = 256


# =============================================================================
# Template references
# =============================================================================


@dataclass(frozen=True, slots=True)
class CurrentFieldValue:
	"""The current content of the field that triggered the event."""

	name = "currentFieldValue"


@dataclass(frozen=True, slots=True)
class CurrentFieldChecked:
	"""The checked flag of the checkbox/radio that triggered the event."""

	name = "currentFieldChecked"


TemplateRef: TypeAlias = CurrentFieldValue | CurrentFieldChecked

CURRENT_FIELD_VALUE = CurrentFieldValue()
CURRENT_FIELD_CHECKED = CurrentFieldChecked()

TEMPLATE_REFS: dict[str, TemplateRef] = {
	CurrentFieldValue.name: CURRENT_FIELD_VALUE,
	CurrentFieldChecked.name: CURRENT_FIELD_CHECKED,
}

# String markers emitted by older builders. Accepted when parsing only.
LEGACY_TEMPLATE_MARKERS: dict[str, TemplateRef] = {
	"{{event.target.value}}": CURRENT_FIELD_VALUE,
	"{{event.target.checked}}": CURRENT_FIELD_CHECKED,
}


# =============================================================================
# Children
# =============================================================================


@dataclass(frozen=True, slots=True)
class Empty:
	pass


@dataclass(frozen=True, slots=True)
class Text:
	value: str


@dataclass(frozen=True, slots=True)
class Single:
	node: Node


@dataclass(frozen=True, slots=True)
class Many:
	items: tuple[Content, ...]


Content: TypeAlias = Empty | Text | Single | Many

EMPTY = Empty()


# =============================================================================
# Events
# =============================================================================


class EventAction(StrEnum):
	SUBMIT = "submit"
	PREVENT_DEFAULT = "preventDefault"
	UPDATE_STATE = "updateState"


SUPPRESSING_ACTIONS: frozenset[str] = frozenset(
	{EventAction.SUBMIT, EventAction.PREVENT_DEFAULT}
)
_KNOWN_ACTIONS: frozenset[str] = frozenset(EventAction)


@dataclass(frozen=True, slots=True)
class EventDescriptor:
	action: str | None = None
	state_updates: Mapping[str, Any] | None = None
	emit_event: str | None = None
	data: Mapping[str, Any] | None = None

	@property
	def suppresses_default(self) -> bool:
		return self.action in SUPPRESSING_ACTIONS

	def to_json(self) -> EventDescriptorJson:
		out: EventDescriptorJson = {}
		if self.action is not None:
			out["action"] = str(self.action)
		if self.state_updates is not None:
			out["stateUpdates"] = {
				k: template_to_json(v) for k, v in self.state_updates.items()
			}
		if self.emit_event is not None:
			out["emitEvent"] = self.emit_event
		if self.data is not None:
			out["data"] = dict(self.data)
		return out


# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
	"""One element of a definition tree.

	Nodes are never mutated after construction; the interpreter keeps all
	mutable state in its `StateStore`.
	"""

	type: str
	props: Mapping[str, Any] = field(default_factory=dict)
	children: Content = EMPTY
	events: Mapping[str, EventDescriptor] = field(default_factory=dict)
	state_bindings: Mapping[str, str] = field(default_factory=dict)

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		return (
			f"Node(type={self.type!r}, props={dict(self.props)!r}, "
			f"children={self.children!r})"
		)

	def to_json(self) -> NodeJson:
		out: NodeJson = {"type": self.type}
		if self.props:
			out["props"] = dict(self.props)
		if not isinstance(self.children, Empty):
			out["children"] = content_to_json(self.children)
		if self.events:
			out["events"] = {name: d.to_json() for name, d in self.events.items()}
		if self.state_bindings:
			out["stateBindings"] = dict(self.state_bindings)
		return out


ChildInput: TypeAlias = (
	"Node | Content | str | int | float | Sequence[ChildInput] | Mapping[str, Any] | None"
)


def content_of(value: ChildInput) -> Content:
	"""Coerce builder-friendly Python values into `Content`.

	`None` becomes `Empty`, strings and numbers become `Text`, nodes become
	`Single` and lists or tuples become `Many`. Mappings are shown as JSON
	text and any other value as its `str()`. `Content` values pass through.
	"""
	if value is None or isinstance(value, bool):
		return EMPTY
	if isinstance(value, (Empty, Text, Single, Many)):
		return value
	if isinstance(value, Node):
		return Single(value)
	if isinstance(value, str):
		return Text(value)
	if isinstance(value, (int, float)):
		return Text(str(value))
	if isinstance(value, (list, tuple)):
		return Many(tuple(content_of(item) for item in cast(Sequence[ChildInput], value)))
	if isinstance(value, Mapping):
		return Text(json.dumps(value, default=str))
	return Text(str(value))


# =============================================================================
# Renderable definitions
# =============================================================================


@dataclass(frozen=True, slots=True)
class ServerRendered:
	definition: Node

	def to_json(self) -> ServerRenderedEnvelope:
		return {"renderType": "server-rendered", "definition": self.definition.to_json()}


@dataclass(frozen=True, slots=True)
class LegacyDefinition:
	"""The flat `{type, components: [...]}` shape, rendered non-recursively."""

	type: str
	raw: Mapping[str, Any]

	@property
	def components(self) -> list[Mapping[str, Any]]:
		items = self.raw.get("components")
		if not isinstance(items, list):
			return []
		return [c for c in cast(list[Any], items) if isinstance(c, Mapping)]


RenderableDefinition: TypeAlias = ServerRendered | LegacyDefinition


# =============================================================================
# Serialization
# =============================================================================


def template_to_json(value: Any) -> JsonValue | TemplateRefJson:
	if isinstance(value, (CurrentFieldValue, CurrentFieldChecked)):
		return {"$template": value.name}
	return value


def content_to_json(content: Content) -> ChildrenJson:
	match content:
		case Empty():
			return None
		case Text(value):
			return value
		case Single(node):
			return node.to_json()
		case Many(items):
			out: list[Any] = []
			for item in items:
				out.append(content_to_json(item))
			return out


# =============================================================================
# Parsing
# =============================================================================


def parse_template(value: Any) -> Any:
	"""Turn a wire-format state update value into a `TemplateRef` if it is one."""
	if isinstance(value, str):
		return LEGACY_TEMPLATE_MARKERS.get(value, value)
	if isinstance(value, Mapping) and set(value.keys()) == {"$template"}:
		ref = TEMPLATE_REFS.get(cast(Mapping[str, Any], value)["$template"])
		if ref is not None:
			return ref
	return value


def parse_event_descriptor(
	raw: Any, *, errors: Errors | None = None, where: str = ""
) -> EventDescriptor | None:
	if not isinstance(raw, Mapping):
		if errors is not None:
			errors.report(
				"event.descriptor",
				f"Event descriptor must be an object, got {type(raw).__name__}",
				details={"at": where},
			)
		return None
	raw = cast(Mapping[str, Any], raw)

	action = raw.get("action")
	if action is not None and not isinstance(action, str):
		if errors is not None:
			errors.report(
				"event.descriptor",
				f"Ignoring non-string action {action!r}",
				details={"at": where},
			)
		action = None
	elif action is not None and action not in _KNOWN_ACTIONS and errors is not None:
		errors.report(
			"event.descriptor",
			f"Unrecognized action {action!r} is a no-op",
			details={"at": where},
		)

	state_updates = raw.get("stateUpdates")
	if state_updates is not None and not isinstance(state_updates, Mapping):
		if errors is not None:
			errors.report(
				"event.descriptor", "Ignoring non-object stateUpdates", details={"at": where}
			)
		state_updates = None
	if state_updates is not None:
		state_updates = {
			str(k): parse_template(v)
			for k, v in cast(Mapping[str, Any], state_updates).items()
		}

	emit_event = raw.get("emitEvent")
	if emit_event is not None and not isinstance(emit_event, str):
		if errors is not None:
			errors.report(
				"event.descriptor", "Ignoring non-string emitEvent", details={"at": where}
			)
		emit_event = None

	data = raw.get("data")
	if data is not None and not isinstance(data, Mapping):
		if errors is not None:
			errors.report(
				"event.descriptor", "Ignoring non-object data", details={"at": where}
			)
		data = None

	return EventDescriptor(
		action=action,
		state_updates=state_updates,
		emit_event=emit_event,
		data=dict(cast(Mapping[str, Any], data)) if data is not None else None,
	)


def parse_content(
	raw: Any, *, errors: Errors | None = None, path: str = "", depth: int = 0
) -> Content:
	if raw is None or isinstance(raw, bool):
		return EMPTY
	if isinstance(raw, str):
		return Text(raw)
	if isinstance(raw, (int, float)):
		return Text(str(raw))
	if depth > MAX_DEPTH:
		if errors is not None:
			errors.report(
				"definition.malformed",
				f"Definition nested deeper than {MAX_DEPTH} levels; truncated",
				details={"at": path},
			)
		return EMPTY
	if isinstance(raw, Mapping):
		return Single(parse_node(raw, errors=errors, path=path, depth=depth + 1))
	if isinstance(raw, (list, tuple)):
		items = cast(Sequence[Any], raw)
		return Many(
			tuple(
				parse_content(
					item,
					errors=errors,
					path=f"{path}.{idx}" if path else str(idx),
					depth=depth + 1,
				)
				for idx, item in enumerate(items)
			)
		)
	if errors is not None:
		errors.report(
			"definition.malformed",
			f"Unsupported child of type {type(raw).__name__}",
			details={"at": path},
		)
	return EMPTY


def parse_node(
	raw: Mapping[str, Any],
	*,
	errors: Errors | None = None,
	path: str = "",
	depth: int = 0,
) -> Node:
	node_type = raw.get("type")
	if not isinstance(node_type, str):
		if errors is not None:
			errors.report(
				"definition.malformed",
				"Node without a string type",
				details={"at": path, "type": repr(node_type)},
			)
		node_type = ""

	props = raw.get("props")
	if not isinstance(props, Mapping):
		props = {}

	events: dict[str, EventDescriptor] = {}
	raw_events = raw.get("events")
	if isinstance(raw_events, Mapping):
		for name, raw_descriptor in cast(Mapping[str, Any], raw_events).items():
			descriptor = parse_event_descriptor(
				raw_descriptor, errors=errors, where=f"{path}.{name}" if path else name
			)
			if descriptor is not None:
				events[str(name)] = descriptor

	bindings: dict[str, str] = {}
	raw_bindings = raw.get("stateBindings")
	if isinstance(raw_bindings, Mapping):
		for prop, key in cast(Mapping[str, Any], raw_bindings).items():
			if isinstance(key, str):
				bindings[str(prop)] = key

	return Node(
		type=node_type,
		props=dict(cast(Mapping[str, Any], props)),
		children=parse_content(
			raw.get("children"), errors=errors, path=path, depth=depth
		),
		events=events,
		state_bindings=bindings,
	)


def parse_definition(
	raw: Any, *, errors: Errors | None = None
) -> RenderableDefinition | None:
	"""Classify a payload as one of the two definition shapes.

	Returns None for `None` (nothing to mount) and for payloads that match
	neither shape, which are reported as malformed.
	"""
	if raw is None:
		return None
	if isinstance(raw, (ServerRendered, LegacyDefinition)):
		return raw
	if isinstance(raw, Node):
		return ServerRendered(raw)
	if not isinstance(raw, Mapping):
		if errors is not None:
			errors.report(
				"definition.malformed",
				f"Definition must be an object, got {type(raw).__name__}",
			)
		return None
	raw = cast(Mapping[str, Any], raw)

	if raw.get("renderType") == RENDER_TYPE_SERVER:
		definition = raw.get("definition")
		if isinstance(definition, Mapping):
			return ServerRendered(parse_node(definition, errors=errors))
		if errors is not None:
			errors.report(
				"definition.malformed", "Server-rendered envelope without a definition"
			)
		return None

	legacy_type = raw.get("type")
	if isinstance(legacy_type, str):
		return LegacyDefinition(type=legacy_type, raw=raw)

	if errors is not None:
		errors.report("definition.malformed", "Unrecognized definition shape")
	return None


__all__ = [
	"CURRENT_FIELD_CHECKED",
	"CURRENT_FIELD_VALUE",
	"EMPTY",
	"Content",
	"CurrentFieldChecked",
	"CurrentFieldValue",
	"Empty",
	"EventAction",
	"EventDescriptor",
	"LegacyDefinition",
	"Many",
	"Node",
	"RenderableDefinition",
	"ServerRendered",
	"Single",
	"TemplateRef",
	"Text",
	"content_of",
	"content_to_json",
	"parse_content",
	"parse_definition",
	"parse_event_descriptor",
	"parse_node",
	"parse_template",
]
