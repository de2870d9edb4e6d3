import json
from typing import Any

from high5.builder import build, build_envelope
from high5.errors import Errors
from high5.nodes import Node, Single, parse_definition
from high5.renderer import Renderer
from high5.state import StateStore


def rendered(node: Node) -> Any:
	return Renderer(StateStore()).render_tree(Single(node))


def find_all(vdom: Any, tag: str) -> list[dict[str, Any]]:
	found: list[dict[str, Any]] = []
	if isinstance(vdom, list):
		for item in vdom:
			found.extend(find_all(item, tag))
	elif isinstance(vdom, dict):
		if vdom["tag"] == tag:
			found.append(vdom)
		found.extend(find_all(vdom.get("children", []), tag))
	return found


def test_form_field_defaults():
	vdom = rendered(build("form", {"fields": ["email"]}))
	[label] = find_all(vdom, "label")
	[field] = find_all(vdom, "input")
	assert label["children"] == ["Email"]
	assert label["props"]["htmlFor"] == "field-email"
	assert field["props"]["placeholder"] == "Enter your email"
	assert field["props"]["id"] == "field-email"
	assert field["props"]["type"] == "text"
	assert field["props"]["value"] is None


def test_form_layout():
	vdom = rendered(build("form", {"title": "Contact", "submitLabel": "Send"}))
	assert vdom["props"]["className"].startswith("dynamic-form")
	assert find_all(vdom, "h3")[0]["children"] == ["Contact"]
	[form] = find_all(vdom, "form")
	assert form["eval"] == ["onSubmit"]
	# label, input, spacer per default field, then the submit button
	assert [child["tag"] for child in form["children"]] == [
		"label", "input", "div",
		"label", "input", "div",
		"label", "input", "div",
		"button",
	]
	[submit] = find_all(vdom, "button")
	assert submit["children"] == ["Send"]
	assert submit["props"]["type"] == "submit"


def test_form_field_variants():
	node = build(
		"form",
		{
			"fields": [
				{"name": "bio", "type": "textarea", "required": True},
				{"name": "role", "type": "select", "options": ["admin", {"value": "u", "label": "User"}]},
				{"name": "age", "type": "number", "label": "Your age", "placeholder": "42"},
			]
		},
	)
	vdom = rendered(node)
	labels = find_all(vdom, "label")
	assert labels[0]["children"] == ["Bio", {"tag": "span", "props": {"className": "text-red-500 ml-1"}, "children": ["*"]}]
	assert labels[2]["children"] == ["Your age"]

	[bio] = find_all(vdom, "textarea")
	assert bio["props"]["rows"] == 4
	assert bio["props"]["required"] is True

	[role] = find_all(vdom, "select")
	assert [(o["props"]["value"], o["children"]) for o in find_all(role, "option")] == [
		("admin", ["admin"]),
		("u", ["User"]),
	]

	[age] = find_all(vdom, "input")
	assert age["props"]["type"] == "number"
	assert age["props"]["placeholder"] == "42"


def test_form_inputs_update_and_bind_their_own_key():
	node = build("form", {"fields": ["name", "email"]})
	envelope = build_envelope("form", {"fields": ["name", "email"]})
	assert parse_definition(envelope) is not None
	form = node.to_json()["children"][1]
	inputs = [child for child in form["children"] if child["type"] == "input"]
	for field in inputs:
		name = field["props"]["name"]
		assert field["stateBindings"] == {"value": name}
		assert field["events"]["onChange"] == {
			"action": "updateState",
			"stateUpdates": {name: {"$template": "currentFieldValue"}},
		}


def test_submit_button_descriptor():
	envelope = build_envelope("form", {"fields": ["name"]})
	form = envelope["definition"]["children"][1]
	button = form["children"][-1]
	assert button["events"]["onClick"] == {"action": "submit", "emitEvent": "submit", "data": {}}
	assert form["events"] == {"onSubmit": {"action": "preventDefault"}}


def test_table_rows_render_one_to_one():
	vdom = rendered(build("table", {"headers": ["A", "B"], "rows": [["1", "2"], ["3"]]}))
	assert [th["children"] for th in find_all(vdom, "th")] == [["A"], ["B"]]
	[tbody] = find_all(vdom, "tbody")
	rows = find_all(tbody, "tr")
	assert [[td["children"] for td in find_all(row, "td")] for row in rows] == [
		[["1"], ["2"]],
		[["3"]],
	]


def test_table_defaults():
	vdom = rendered(build("table"))
	assert find_all(vdom, "h3")[0]["children"] == ["Data Table"]
	assert [th["children"][0] for th in find_all(vdom, "th")] == ["Name", "Email", "Role"]
	assert len(find_all(find_all(vdom, "tbody")[0], "tr")) == 2


def test_chart_placeholder_and_data():
	data = {"labels": ["x"], "datasets": []}
	vdom = rendered(build("chart", {"title": "Sales", "chartType": "Line", "data": data}))
	assert find_all(vdom, "h3")[0]["children"] == ["Sales"]
	paragraphs = [p["children"][0] for p in find_all(vdom, "p")]
	assert "Line Chart Visualization (Placeholder)" in paragraphs
	[pre] = find_all(vdom, "pre")
	assert json.loads(pre["children"][0]) == data


def test_chart_defaults():
	vdom = rendered(build("chart"))
	assert find_all(vdom, "h3")[0]["children"] == ["Chart"]
	assert "Bar Chart Visualization (Placeholder)" in [p["children"][0] for p in find_all(vdom, "p")]
	[pre] = find_all(vdom, "pre")
	assert json.loads(pre["children"][0])["datasets"][0]["data"] == [12, 19, 3, 5, 2]


def test_dashboard_cards():
	vdom = rendered(build("dashboard"))
	assert vdom["props"]["className"] == "dynamic-dashboard"
	titles = [h4["children"] for h4 in find_all(vdom, "h4")]
	assert titles == [["Summary"], ["Data Visualization"]]
	paragraphs = [p["children"][0] for p in find_all(vdom, "p")]
	assert paragraphs == [
		"This is a dynamically generated dashboard card.",
		"bar Chart Visualization (Placeholder)",
	]


def test_unknown_archetype_is_informative_text():
	errors = Errors()
	node = build("spaceship", errors=errors)
	assert node.type == "p"
	assert rendered(node)["children"] == [
		'I don\'t know how to generate UI components of type "spaceship" yet.'
	]
	assert [d.code for d in errors.diagnostics] == ["builder.archetype"]


def test_envelope_shape():
	envelope = build_envelope("table")
	assert envelope["renderType"] == "server-rendered"
	assert envelope["definition"]["type"] == "div"


def test_empty_rows_render_empty_body():
	vdom = rendered(build("table", {"headers": ["A"], "rows": []}))
	assert [th["children"] for th in find_all(vdom, "th")] == [["A"]]
	[tbody] = find_all(vdom, "tbody")
	assert find_all(tbody, "tr") == []
	assert find_all(vdom, "td") == []


def test_empty_fields_render_only_submit():
	vdom = rendered(build("form", {"fields": []}))
	[form] = find_all(vdom, "form")
	assert [child["tag"] for child in form["children"]] == ["button"]


def test_empty_chart_data_is_kept():
	vdom = rendered(build("chart", {"data": {}}))
	[pre] = find_all(vdom, "pre")
	assert pre["children"] == ["{}"]


def test_empty_cards_render_empty_grid():
	vdom = rendered(build("dashboard", {"cards": []}))
	assert find_all(vdom, "h4") == []


def test_none_parameters_fall_back_to_defaults():
	vdom = rendered(build("table", {"headers": None, "rows": None}))
	assert [th["children"][0] for th in find_all(vdom, "th")] == ["Name", "Email", "Role"]
	assert len(find_all(find_all(vdom, "tbody")[0], "tr")) == 2


def test_option_without_label_or_value_is_blank():
	vdom = rendered(build("form", {"fields": [{"name": "pick", "type": "select", "options": [{}]}]}))
	[opt] = find_all(vdom, "option")
	assert opt["children"] == [""]


def test_mapping_card_content_renders_as_json():
	vdom = rendered(build("dashboard", {"cards": [{"title": "Totals", "content": {"total": 3}}]}))
	[body] = find_all(vdom, "p")
	assert body["children"] == ['{"total": 3}']
