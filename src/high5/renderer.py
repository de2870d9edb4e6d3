from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple, TypeAlias

from high5.dom.factory import materialize
from high5.errors import Errors
from high5.events import EventChannel, Handler, compile_handler
from high5.nodes import Content, Empty, Many, Node, Single, Text
from high5.state import StateStore
from high5.vdom import CALLBACK_PLACEHOLDER, VDOM, VDOMElement, VDOMNode, VDOMPropValue

RenderPath: TypeAlias = str


class Callback(NamedTuple):
	fn: Handler
	event: str
	tag: str
	props: Mapping[str, VDOMPropValue]


Callbacks = dict[str, Callback]


class Renderer:
	"""One render pass over a definition tree.

	A renderer is single-use: each pass (initial mount or re-render after a
	state change) builds a fresh VDOM and a fresh callback table keyed by
	`<path>.<eventName>`, where the path is the positional index chain from the
	root.
	"""

	def __init__(
		self,
		store: StateStore,
		emit: EventChannel | None = None,
		errors: Errors | None = None,
	) -> None:
		self.store = store
		self.emit = emit
		self.errors = errors
		self.callbacks: Callbacks = {}

	def render_tree(self, content: Content, path: RenderPath = "") -> VDOM:
		match content:
			case Empty():
				return None
			case Text(value):
				return value
			case Single(node):
				return self.render_node(node, path)
			case Many(items):
				return self.render_many(items, path)

	def render_many(self, items: tuple[Content, ...], path: RenderPath) -> list[VDOMNode]:
		out: list[VDOMNode] = []
		for idx, item in enumerate(items):
			splice(out, self.render_tree(item, join_path(path, idx)))
		return out

	def render_node(self, node: Node, path: RenderPath) -> VDOMElement:
		props = self.resolve_props(node, path)

		for event_name, descriptor in node.events.items():
			key = join_path(path, event_name)
			handler = compile_handler(descriptor, self.store, self.emit)
			props[event_name] = CALLBACK_PLACEHOLDER
			self.callbacks[key] = Callback(
				fn=handler, event=event_name, tag=node.type, props=props
			)

		children = self.render_children(node.children, path)
		return materialize(
			node.type,
			props,
			children,
			callbacks=node.events.keys(),
			errors=self.errors,
			path=path,
		)

	def render_children(self, content: Content, path: RenderPath) -> list[VDOMNode]:
		match content:
			case Empty():
				return []
			case Text(value):
				return [value]
			case Single(node):
				return [self.render_node(node, join_path(path, 0))]
			case Many(items):
				return self.render_many(items, path)

	def resolve_props(self, node: Node, path: RenderPath) -> dict[str, Any]:
		resolved: dict[str, Any] = dict(node.props)
		for prop_name, state_key in node.state_bindings.items():
			if state_key not in self.store and self.errors is not None:
				self.errors.report(
					"binding.missing",
					f"State key {state_key!r} is not set",
					details={"path": path, "prop": prop_name},
					once_key=f"{path}:{prop_name}",
				)
			# Present-but-None distinguishes "not set" from a dropped prop
			resolved[prop_name] = self.store.get(state_key)
		return resolved


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def splice(out: list[VDOMNode], rendered: VDOM) -> None:
	if rendered is None:
		return
	if isinstance(rendered, list):
		out.extend(rendered)
	else:
		out.append(rendered)


def join_path(prefix: RenderPath, path: str | int) -> RenderPath:
	if prefix:
		return f"{prefix}.{path}"
	return str(path)


__all__ = [
	"Callback",
	"Callbacks",
	"EventChannel",
	"RenderPath",
	"Renderer",
	"join_path",
	"splice",
]
