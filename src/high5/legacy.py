"""Flat `{type, components}` definitions.

This is the quick path that predates server-rendered trees: a fixed layout per
definition type, one level deep, with form values kept in the mount's state
store under each field's name. On submit the raw form data (not wrapped in
`{"state": ...}`) is emitted as the `submit` payload.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, cast

from high5.dom.factory import element
from high5.dom.tags import Tag
from high5.errors import Errors
from high5.events import EventChannel, EventTrigger
from high5.nodes import LegacyDefinition
from high5.renderer import Callback, Callbacks, join_path
from high5.state import StateStore
from high5.vdom import CALLBACK_PLACEHOLDER, LegacyDefinitionJson, VDOMElement, VDOMNode

SAMPLE_CHART_DATA: dict[str, Any] = {
	"labels": ["Jan", "Feb", "Mar", "Apr", "May"],
	"datasets": [{"label": "Sample Data", "data": [12, 19, 3, 5, 2]}],
}

DEFAULT_FORM_FIELDS = ["name", "email", "message"]

FIELD_LABEL_CLASS = "block text-sm font-medium text-gray-700 mb-1"
REQUIRED_MARKER_CLASS = "text-red-500 ml-1"
TITLE_CLASS = "text-lg font-medium mb-4"
CARD_CLASS = "bg-white rounded-lg border border-gray-200 shadow-sm p-6 h-full"
CARD_TITLE_CLASS = "text-md font-medium mb-2"


class LegacyRenderer:
	"""Renders one `LegacyDefinition` against a state store.

	Like `high5.renderer.Renderer` it is single-use and fills `callbacks` while
	rendering.
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

	def render(self, definition: LegacyDefinition) -> VDOMElement:
		raw = definition.raw
		match definition.type:
			case "form":
				return self.render_form(definition.components)
			case "dashboard":
				return self.render_dashboard(definition.components)
			case "chart":
				return self.render_chart(raw)
			case "table":
				return self.render_table(raw)
			case "message":
				return _el(Tag.P, {"className": "text-gray-700"}, [str(raw.get("content", ""))])
			case other:
				return _el(
					Tag.DIV,
					{"className": "p-4 border border-gray-200 rounded-lg"},
					[_el(Tag.P, {"className": "text-gray-500"}, [f"Unknown component type: {other}"])],
				)

	# ------------------------------------------------------------------
	# Form
	# ------------------------------------------------------------------

	def render_form(self, components: list[Mapping[str, Any]]) -> VDOMElement:
		fields: list[VDOMNode] = []
		for idx, component in enumerate(components):
			match component.get("type"):
				case "input" | "textarea" as kind:
					fields.append(self.render_field(kind, component, join_path("form", idx)))
				case "button" if component.get("action") == "submit":
					fields.append(
						_el(
							Tag.DIV,
							{"className": "mt-6"},
							[
								_el(
									Tag.BUTTON,
									{"type": "submit", "variant": component.get("variant") or "primary"},
									[str(component.get("label") or "Submit")],
								)
							],
						)
					)
				case _:
					# Anything else renders nothing in the flat form
					continue

		form_props: dict[str, Any] = {"onSubmit": CALLBACK_PLACEHOLDER}
		self.register("form.onSubmit", Tag.FORM, form_props, self.submit)
		return _el(
			Tag.DIV,
			{"className": "dynamic-form"},
			[
				_el(Tag.H3, {"className": TITLE_CLASS}, ["Dynamic Form"]),
				element(Tag.FORM, form_props, fields, callbacks=["onSubmit"]),
			],
		)

	def render_field(
		self, kind: str, component: Mapping[str, Any], path: str
	) -> VDOMElement:
		name = str(component.get("name") or "")
		label: list[VDOMNode] = [str(component.get("label") or "")]
		if component.get("required"):
			label.append(_el(Tag.SPAN, {"className": REQUIRED_MARKER_CLASS}, ["*"]))

		current = self.store.get(name)
		props: dict[str, Any] = {
			"name": name,
			"placeholder": component.get("placeholder"),
			"value": current if current is not None else "",
			"required": bool(component.get("required")),
			"onChange": CALLBACK_PLACEHOLDER,
		}
		if kind == "input":
			props["type"] = "text"
		tag = Tag.INPUT if kind == "input" else Tag.TEXTAREA

		def on_change(trigger: EventTrigger) -> None:
			self.store.merge({name: trigger.value})

		self.register(join_path(path, "onChange"), tag, props, on_change)
		return _el(
			Tag.DIV,
			{"className": "mb-4"},
			[
				_el(Tag.LABEL, {"className": FIELD_LABEL_CLASS}, label),
				element(tag, props, (), callbacks=["onChange"]),
			],
		)

	def submit(self, trigger: EventTrigger) -> None:
		trigger.prevent_default()
		if self.emit is not None:
			self.emit("submit", self.store.snapshot())

	# ------------------------------------------------------------------
	# Read-only layouts
	# ------------------------------------------------------------------

	def render_dashboard(self, components: list[Mapping[str, Any]]) -> VDOMElement:
		cards: list[VDOMNode] = []
		for component in components:
			title = str(component.get("title") or "")
			match component.get("type"):
				case "card":
					content = component.get("content")
					body = _el(Tag.P, {}, ["" if content is None else _text(content)])
				case "chart":
					body = _el(
						Tag.DIV,
						{"className": "h-40 bg-gray-100 flex items-center justify-center"},
						[_el(Tag.P, {"className": "text-gray-500"}, ["Chart Visualization (Placeholder)"])],
					)
				case _:
					continue
			cards.append(
				_el(
					Tag.DIV,
					{"className": CARD_CLASS},
					[_el(Tag.H4, {"className": CARD_TITLE_CLASS}, [title]), body],
				)
			)
		return _el(
			Tag.DIV,
			{"className": "dynamic-dashboard"},
			[
				_el(Tag.H3, {"className": TITLE_CLASS}, ["Dashboard"]),
				_el(Tag.DIV, {"className": "grid grid-cols-1 md:grid-cols-2 gap-4"}, cards),
			],
		)

	def render_chart(self, raw: Mapping[str, Any]) -> VDOMElement:
		return _el(
			Tag.DIV,
			{"className": "dynamic-chart"},
			[
				_el(Tag.H3, {"className": TITLE_CLASS}, [str(raw.get("title") or "Chart")]),
				_el(
					Tag.DIV,
					{"className": "h-60 bg-gray-100 rounded-lg flex items-center justify-center"},
					[
						_el(
							Tag.P,
							{"className": "text-gray-500"},
							[f"{raw.get('chartType') or ''} Chart Visualization (Placeholder)".lstrip()],
						)
					],
				),
				_el(
					Tag.DIV,
					{"className": "mt-4"},
					[
						_el(Tag.H4, {"className": "text-sm font-medium mb-2"}, ["Data"]),
						_el(
							Tag.PRE,
							{"className": "bg-gray-50 p-2 rounded text-xs overflow-auto"},
							[json.dumps(raw.get("data"), indent=2)],
						),
					],
				),
			],
		)

	def render_table(self, raw: Mapping[str, Any]) -> VDOMElement:
		headers = _as_list(raw.get("headers"))
		rows = [_as_list(row) for row in _as_list(raw.get("rows"))]
		header_cells: list[VDOMNode] = [
			_el(Tag.TH, {"scope": "col"}, [_text(header)]) for header in headers
		]
		body_rows: list[VDOMNode] = [
			_el(Tag.TR, {}, [_el(Tag.TD, {}, [_text(cell)]) for cell in row]) for row in rows
		]
		return _el(
			Tag.DIV,
			{"className": "dynamic-table"},
			[
				_el(Tag.H3, {"className": TITLE_CLASS}, ["Data Table"]),
				_el(
					Tag.DIV,
					{"className": "overflow-x-auto"},
					[
						_el(
							Tag.TABLE,
							{"className": "min-w-full divide-y divide-gray-200"},
							[
								_el(Tag.THEAD, {"className": "bg-gray-50"}, [_el(Tag.TR, {}, header_cells)]),
								_el(Tag.TBODY, {"className": "bg-white divide-y divide-gray-200"}, body_rows),
							],
						)
					],
				),
			],
		)

	def register(
		self, key: str, tag: Tag, props: Mapping[str, Any], fn: Any
	) -> None:
		event = key.rsplit(".", 1)[-1]
		self.callbacks[key] = Callback(fn=fn, event=event, tag=str(tag), props=props)


# ----------------------------------------------------------------------
# Flat builder
# ----------------------------------------------------------------------


def build_flat(archetype: str, parameters: Mapping[str, Any] | None = None) -> LegacyDefinitionJson:
	"""Build the flat definition shape for an archetype."""
	params = dict(parameters or {})
	match archetype:
		case "form":
			return flat_form(param_or(params, "fields", DEFAULT_FORM_FIELDS), params)
		case "dashboard":
			return flat_dashboard(param_or(params, "cards", default_cards()))
		case "chart":
			return cast(
				LegacyDefinitionJson,
				{
					"type": "chart",
					"chartType": params.get("chartType") or "bar",
					"title": params.get("title") or "Data Visualization",
					"data": param_or(params, "data", SAMPLE_CHART_DATA),
				},
			)
		case "table":
			return cast(
				LegacyDefinitionJson,
				{
					"type": "table",
					"headers": param_or(params, "headers", ["Name", "Email", "Role"]),
					"rows": param_or(params, "rows", default_rows()),
				},
			)
		case _:
			return cast(
				LegacyDefinitionJson,
				{
					"type": "message",
					"content": f'I don\'t know how to generate UI components of type "{archetype}" yet.',
				},
			)


def flat_form(fields: Sequence[Any], options: Mapping[str, Any]) -> LegacyDefinitionJson:
	components: list[dict[str, Any]] = []
	for field in fields:
		if isinstance(field, str):
			components.append(
				{
					"type": "input",
					"name": field,
					"label": field[:1].upper() + field[1:],
					"placeholder": f"Enter your {field}",
				}
			)
			continue
		entry = cast(Mapping[str, Any], field)
		name = str(entry.get("name", ""))
		components.append(
			{
				"type": entry.get("type") or "input",
				"name": name,
				"label": entry.get("label") or name[:1].upper() + name[1:],
				"placeholder": entry.get("placeholder") or f"Enter your {name}",
				"required": bool(entry.get("required", False)),
				"options": list(entry.get("options") or []),
			}
		)
	components.append(
		{
			"type": "button",
			"label": options.get("submitLabel") or "Submit",
			"action": "submit",
			"variant": "primary",
		}
	)
	return {"type": "form", "components": components}


def flat_dashboard(cards: Sequence[Mapping[str, Any]]) -> LegacyDefinitionJson:
	components: list[dict[str, Any]] = []
	for card in cards:
		if card.get("type") == "chart":
			components.append(
				{
					"type": "chart",
					"chartType": card.get("chartType") or "bar",
					"title": card.get("title"),
					"data": card.get("data"),
				}
			)
		else:
			components.append(
				{"type": "card", "title": card.get("title"), "content": card.get("content")}
			)
	return {"type": "dashboard", "components": components}


def param_or(params: Mapping[str, Any], key: str, default: Any) -> Any:
	"""`params[key]`, or `default` when the key is absent or None.

	Empty lists and mappings are kept: an empty `rows` means an empty table.
	"""
	value = params.get(key)
	return default if value is None else value


def default_cards() -> list[dict[str, Any]]:
	return [
		{"title": "Summary", "content": "This is a dynamically generated dashboard card."},
		{
			"type": "chart",
			"chartType": "bar",
			"title": "Data Visualization",
			"data": SAMPLE_CHART_DATA,
		},
	]


def default_rows() -> list[list[str]]:
	return [
		["John Doe", "john@example.com", "Admin"],
		["Jane Smith", "jane@example.com", "User"],
	]


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _el(tag: Tag, props: dict[str, Any], children: Sequence[VDOMNode]) -> VDOMElement:
	return element(tag, props, children)


def _text(value: Any) -> str:
	return value if isinstance(value, str) else json.dumps(value)


def _as_list(value: Any) -> list[Any]:
	if isinstance(value, (list, tuple)):
		return list(cast(Sequence[Any], value))
	return []


__all__ = [
	"DEFAULT_FORM_FIELDS",
	"SAMPLE_CHART_DATA",
	"LegacyRenderer",
	"build_flat",
	"default_cards",
	"default_rows",
	"flat_dashboard",
	"flat_form",
	"param_or",
]
