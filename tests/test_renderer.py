from typing import Any

from high5.dom.tags import div, input_, li, span, ul
from high5.errors import Errors
from high5.events import EventTrigger
from high5.nodes import (
	CURRENT_FIELD_CHECKED,
	CURRENT_FIELD_VALUE,
	EMPTY,
	EventDescriptor,
	Many,
	Node,
	Single,
	Text,
)
from high5.renderer import Renderer, join_path
from high5.state import StateStore


def render(node: Node, store: StateStore | None = None, **kwargs: Any):
	renderer = Renderer(store if store is not None else StateStore(), **kwargs)
	return renderer.render_tree(Single(node)), renderer


def test_join_path():
	assert join_path("", 0) == "0"
	assert join_path("0", 2) == "0.2"
	assert join_path("0.2", "onClick") == "0.2.onClick"


def test_render_content_variants():
	renderer = Renderer(StateStore())
	assert renderer.render_tree(EMPTY) is None
	assert renderer.render_tree(Text("hi")) == "hi"
	assert renderer.render_tree(Many((Text("a"), EMPTY, Single(span("b"))))) == [
		"a",
		{"tag": "span", "children": ["b"]},
	]


def test_nested_many_is_spliced_into_parent():
	node = div(["a", ["b", "c"]], "d")
	vdom, _ = render(node)
	assert vdom == {"tag": "div", "children": ["a", "b", "c", "d"]}


def test_rerender_is_idempotent():
	store = StateStore({"name": "Ada"})
	node = div(
		input_(
			bind={"value": "name"},
			events={"onChange": EventDescriptor(action="updateState")},
		),
		"text",
	)
	first, first_renderer = render(node, store)
	second, second_renderer = render(node, store)
	assert first == second
	assert list(first_renderer.callbacks) == list(second_renderer.callbacks)


def test_binding_overrides_static_prop():
	store = StateStore()
	node = input_(value="static", bind={"value": "x"})

	vdom, _ = render(node, store)
	# Unresolved binding is present with None, not dropped
	assert vdom["props"] == {"value": None}

	store.merge({"x": "dynamic"})
	vdom, _ = render(node, store)
	assert vdom["props"] == {"value": "dynamic"}


def test_missing_binding_reported_once():
	errors = Errors()
	store = StateStore()
	node = input_(bind={"value": "x"})
	render(node, store, errors=errors)
	render(node, store, errors=errors)
	assert len(errors.by_code("binding.missing")) == 1


def test_children_order_is_preserved():
	node = ul(li("A"), li("B"), li("C"))
	for _ in range(3):
		vdom, _ = render(node)
		assert [child["children"] for child in vdom["children"]] == [["A"], ["B"], ["C"]]


def test_unknown_type_still_renders_children():
	node = Node(type="totally-unknown", children=Text("hello"))
	vdom, _ = render(node, errors=Errors())
	assert vdom["tag"] == "div"
	assert "hello" in vdom["children"]


def test_unknown_type_keeps_nested_callbacks():
	node = Node(
		type="widget",
		children=Single(div(events={"onClick": EventDescriptor(emit_event="x")})),
	)
	_, renderer = render(node)
	assert list(renderer.callbacks) == ["0.onClick"]


def test_events_render_as_placeholders():
	node = div(
		span("x"),
		div(events={"onClick": EventDescriptor(emit_event="clicked")}),
	)
	vdom, renderer = render(node)
	clickable = vdom["children"][1]
	assert clickable["props"] == {"onClick": "$cb"}
	assert clickable["eval"] == ["onClick"]
	assert list(renderer.callbacks) == ["1.onClick"]
	callback = renderer.callbacks["1.onClick"]
	assert callback.event == "onClick"
	assert callback.tag == "div"


def test_handler_updates_state_from_trigger():
	store = StateStore()
	node = input_(
		events={
			"onChange": EventDescriptor(
				action="updateState",
				state_updates={"name": CURRENT_FIELD_VALUE, "agree": CURRENT_FIELD_CHECKED},
			)
		}
	)
	_, renderer = render(node, store)
	trigger = EventTrigger(value="Ada", checked=True)
	renderer.callbacks["onChange"].fn(trigger)
	assert store.snapshot() == {"name": "Ada", "agree": True}
	assert not trigger.default_prevented


def test_handler_emits_data_with_state_snapshot():
	store = StateStore({"a": 1})
	emitted: list[tuple[str, dict[str, Any]]] = []
	node = div(
		events={
			"onClick": EventDescriptor(
				action="submit", emit_event="go", data={"source": "button"}
			)
		}
	)
	_, renderer = render(node, store, emit=lambda name, payload: emitted.append((name, payload)))
	trigger = EventTrigger()
	renderer.callbacks["onClick"].fn(trigger)
	assert trigger.default_prevented
	assert emitted == [("go", {"source": "button", "state": {"a": 1}})]
