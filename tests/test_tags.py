from high5.dom.factory import UNKNOWN_MARKER_PROP, materialize
from high5.dom.tags import Tag, Unknown, button, div, input_, label, resolve_tag, span
from high5.errors import Errors
from high5.nodes import EMPTY, EventDescriptor, Many, Single, Text


def test_resolve_tag():
	assert resolve_tag("div") is Tag.DIV
	assert resolve_tag("legend") is Tag.LEGEND
	assert resolve_tag("marquee") == Unknown("marquee")


def test_tag_constructors_build_nodes():
	node = div(
		"hello",
		span("x"),
		className="box",
		events={"onClick": EventDescriptor(emit_event="clicked")},
		bind={"title": "title"},
	)
	assert node.type == "div"
	assert node.props == {"className": "box"}
	assert node.children == Many((Text("hello"), Single(span("x"))))
	assert node.events["onClick"].emit_event == "clicked"
	assert node.state_bindings == {"title": "title"}


def test_tag_constructor_child_counts():
	assert div().children is EMPTY
	assert label("Name").children == Text("Name")
	assert button(["a", "b"]).children == Many((Text("a"), Text("b")))


def test_self_closing_tag_takes_no_children():
	node = input_(type="text", name="email")
	assert node.type == "input"
	assert node.children is EMPTY
	assert node.props == {"type": "text", "name": "email"}


def test_materialize_known_tag():
	el = materialize("button", {"onClick": "$cb", "type": "submit"}, ["Go"], callbacks=["onClick"])
	assert el == {
		"tag": "button",
		"props": {"onClick": "$cb", "type": "submit"},
		"children": ["Go"],
		"eval": ["onClick"],
	}


def test_materialize_omits_empty_fields():
	assert materialize("div", {}, []) == {"tag": "div"}


def test_void_tags_drop_children():
	el = materialize("input", {"name": "x"}, ["ignored"])
	assert "children" not in el
	assert el["props"] == {"name": "x"}


def test_unknown_tag_falls_back_and_keeps_children():
	errors = Errors()
	el = materialize("totally-unknown", {"className": "x"}, ["hello"], errors=errors, path="0.1")
	assert el["tag"] == "div"
	assert el["props"][UNKNOWN_MARKER_PROP] == "totally-unknown"
	assert el["props"]["style"] == {"color": "red"}
	assert el["children"] == ["Unknown component type: totally-unknown", "hello"]
	assert [d.code for d in errors.diagnostics] == ["render.unknown_tag"]
	assert errors.diagnostics[0].details["path"] == "0.1"


def test_unknown_tag_reported_once_per_path():
	errors = Errors()
	materialize("blink", {}, [], errors=errors, path="0")
	materialize("blink", {}, [], errors=errors, path="0")
	materialize("blink", {}, [], errors=errors, path="1")
	assert len(errors.by_code("render.unknown_tag")) == 2
