"""Typed JSON formats for UI definitions and rendered output.

Two wire formats live here:
- The *definition* format, authored by the builder and shipped to the client
  runtime (`NodeJson`, `EventDescriptorJson`, envelopes).
- The *VDOM* format, produced by the renderer from a definition and a state
  store. Event handlers never appear in it; callback props carry the `"$cb"`
  placeholder and are resolved through the mount's callback table.
"""

from __future__ import annotations

from typing import Any, Literal, NotRequired, TypeAlias, TypedDict

# =============================================================================
# JSON atoms
# =============================================================================

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]


# =============================================================================
# Definition format (builder -> interpreter)
# =============================================================================


# Reference to a runtime value of the triggering event, e.g.
# {"$template": "currentFieldValue"}
TemplateRefJson = TypedDict("TemplateRefJson", {"$template": str})


class EventDescriptorJson(TypedDict, total=False):
	action: str
	stateUpdates: dict[str, JsonValue | TemplateRefJson]
	emitEvent: str
	data: dict[str, JsonValue]


class NodeJson(TypedDict):
	type: str
	props: NotRequired[dict[str, JsonValue]]
	children: NotRequired["ChildrenJson"]
	events: NotRequired[dict[str, EventDescriptorJson]]
	stateBindings: NotRequired[dict[str, str]]


ChildrenJson: TypeAlias = NodeJson | list["NodeJson | str"] | str | None

RENDER_TYPE_SERVER = "server-rendered"


class ServerRenderedEnvelope(TypedDict):
	renderType: Literal["server-rendered"]
	definition: NodeJson


class LegacyDefinitionJson(TypedDict):
	"""Flat definition shape: `{type, components: [...]}` and friends.

	Chart and table definitions carry their payload at the top level
	(`chartType`, `data`, `headers`, `rows`) instead of in `components`.
	"""

	type: str
	components: NotRequired[list[dict[str, Any]]]


DefinitionJson: TypeAlias = ServerRenderedEnvelope | LegacyDefinitionJson


# =============================================================================
# VDOM tree (rendered output)
# =============================================================================

CALLBACK_PLACEHOLDER = "$cb"

CallbackPlaceholder: TypeAlias = Literal["$cb"]
"""Callback placeholder value.

The callback invocation target is derived from the element path + prop name.
Because the prop name is listed in `VDOMElement.eval`, the placeholder can be a
single sentinel string.
"""

VDOMPropValue: TypeAlias = JsonValue | CallbackPlaceholder


class VDOMElement(TypedDict):
	"""A rendered element.

	`props` holds resolved props (static props overridden by state bindings).
	`eval` lists the prop keys that hold callback placeholders.
	"""

	tag: str
	props: NotRequired[dict[str, VDOMPropValue]]
	children: NotRequired[list["VDOMNode"]]
	eval: NotRequired[list[str]]


VDOMNode: TypeAlias = str | VDOMElement

VDOM: TypeAlias = VDOMNode | list[VDOMNode] | None
