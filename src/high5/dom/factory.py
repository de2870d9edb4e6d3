from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, assert_never

from high5.dom.tags import VOID_TAGS, Tag, Unknown, resolve_tag
from high5.errors import Errors
from high5.vdom import VDOMElement, VDOMNode, VDOMPropValue

UNKNOWN_MARKER_PROP = "data-unknown-component"


def materialize(
	node_type: str,
	props: Mapping[str, VDOMPropValue],
	children: Iterable[VDOMNode],
	*,
	callbacks: Iterable[str] = (),
	errors: Errors | None = None,
	path: str = "",
) -> VDOMElement:
	"""Turn a resolved node into a platform element.

	Known tags map 1:1 to elements. Void tags drop their children. Unknown tags
	become a marked wrapper that still holds the already-rendered children.
	"""
	match resolve_tag(node_type):
		case Unknown(tag):
			if errors is not None:
				errors.report(
					"render.unknown_tag",
					f"Unknown component type: {tag}",
					details={"path": path, "type": tag},
					once_key=f"{path}:{tag}",
				)
			return unknown_element(tag, children)
		case Tag() as tag:
			if tag in VOID_TAGS:
				return element(tag, props, (), callbacks=callbacks)
			return element(tag, props, children, callbacks=callbacks)
		case other:
			assert_never(other)


def element(
	tag: Tag,
	props: Mapping[str, VDOMPropValue],
	children: Iterable[VDOMNode],
	*,
	callbacks: Iterable[str] = (),
) -> VDOMElement:
	vdom_node: VDOMElement = {"tag": str(tag)}
	if props:
		vdom_node["props"] = dict(props)
	children_list = list(children)
	if children_list:
		vdom_node["children"] = children_list
	eval_keys = sorted(callbacks)
	if eval_keys:
		vdom_node["eval"] = eval_keys
	return vdom_node


def unknown_element(tag: str, children: Iterable[VDOMNode]) -> VDOMElement:
	props: dict[str, Any] = {
		UNKNOWN_MARKER_PROP: tag,
		"style": {"color": "red"},
	}
	return {
		"tag": str(Tag.DIV),
		"props": props,
		"children": [f"Unknown component type: {tag}", *children],
	}


__all__ = ["UNKNOWN_MARKER_PROP", "element", "materialize", "unknown_element"]
