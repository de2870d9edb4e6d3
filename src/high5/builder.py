"""Server-side definition builder.

Each archetype turns a handful of parameters into a complete server-rendered
tree. Missing parameters fall back to sample content so that every request
produces something renderable.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from high5.dom.tags import (
	button,
	div,
	form as form_tag,
	h3,
	h4,
	input_,
	label,
	option,
	p,
	pre,
	select,
	span,
	table as table_tag,
	tbody,
	td,
	textarea,
	th,
	thead,
	tr,
)
from high5.errors import Errors
from high5.legacy import (
	DEFAULT_FORM_FIELDS,
	SAMPLE_CHART_DATA,
	default_cards,
	default_rows,
	param_or,
)
from high5.nodes import (
	CURRENT_FIELD_VALUE,
	EventAction,
	EventDescriptor,
	Node,
	ServerRendered,
)
from high5.vdom import ServerRenderedEnvelope

logger = logging.getLogger(__name__)

ARCHETYPES = ("form", "dashboard", "chart", "table")

INPUT_CLASS = (
	"w-full px-4 py-2 border border-gray-300 rounded-md focus:outline-none "
	"focus:ring-2 focus:ring-blue-500 focus:border-transparent "
	"disabled:opacity-50 disabled:bg-gray-100"
)
BUTTON_CLASS = (
	"inline-flex items-center justify-center rounded-md font-medium transition-colors "
	"focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-offset-2 "
	"bg-blue-600 text-white hover:bg-blue-700 h-10 px-4 py-2"
)
TITLE_CLASS = "text-lg font-medium mb-4"
LABEL_CLASS = "block text-sm font-medium text-gray-700 mb-1"


def build(
	archetype: str,
	parameters: Mapping[str, Any] | None = None,
	*,
	errors: Errors | None = None,
) -> Node:
	"""Build the definition tree for an archetype.

	Unknown archetypes are not an error: they build a single paragraph saying so.
	"""
	params = dict(parameters or {})
	match archetype:
		case "form":
			return form(
				param_or(params, "fields", DEFAULT_FORM_FIELDS),
				title=params.get("title") or "Dynamic Form",
				submit_label=params.get("submitLabel") or "Submit",
			)
		case "dashboard":
			return dashboard(
				param_or(params, "cards", default_cards()),
				title=params.get("title") or "Dashboard",
			)
		case "chart":
			return chart(
				title=params.get("title") or "Chart",
				chart_type=params.get("chartType"),
				data=param_or(params, "data", SAMPLE_CHART_DATA),
			)
		case "table":
			return table(
				param_or(params, "headers", ["Name", "Email", "Role"]),
				param_or(params, "rows", default_rows()),
				title=params.get("title") or "Data Table",
			)
		case _:
			if errors is not None:
				errors.report(
					"builder.archetype",
					f"No builder for archetype {archetype!r}",
					details={"archetype": archetype},
				)
			else:
				logger.info("No builder for archetype %r", archetype)
			return p(
				f'I don\'t know how to generate UI components of type "{archetype}" yet.',
				className="text-gray-500",
			)


def build_envelope(
	archetype: str, parameters: Mapping[str, Any] | None = None
) -> ServerRenderedEnvelope:
	return ServerRendered(build(archetype, parameters)).to_json()


# ----------------------------------------------------------------------
# Form
# ----------------------------------------------------------------------


def form(
	fields: Sequence[str | Mapping[str, Any]],
	*,
	title: str = "Dynamic Form",
	submit_label: str = "Submit",
) -> Node:
	children: list[Node] = []
	for field in fields:
		children.extend(form_field(field))

	children.append(
		button(
			submit_label,
			type="submit",
			className=BUTTON_CLASS,
			events={
				"onClick": EventDescriptor(
					action=EventAction.SUBMIT, emit_event="submit", data={}
				)
			},
		)
	)
	return div(
		h3(title, className=TITLE_CLASS),
		form_tag(
			children,
			className="space-y-4",
			events={"onSubmit": EventDescriptor(action=EventAction.PREVENT_DEFAULT)},
		),
		className="dynamic-form bg-white p-6 rounded-lg border border-gray-200",
	)


def form_field(field: str | Mapping[str, Any]) -> list[Node]:
	"""Label, input primitive and spacer for one field."""
	entry: Mapping[str, Any] = {"name": field} if isinstance(field, str) else field
	name = str(entry.get("name", ""))
	field_id = f"field-{name}"
	required = bool(entry.get("required", False))
	field_type = entry.get("type") or "text"
	placeholder = entry.get("placeholder") or f"Enter your {name}"

	label_node = label(
		entry.get("label") or name[:1].upper() + name[1:],
		span("*", className="text-red-500 ml-1") if required else None,
		htmlFor=field_id,
		className=LABEL_CLASS,
	)

	on_change = {
		"onChange": EventDescriptor(
			action=EventAction.UPDATE_STATE,
			state_updates={name: CURRENT_FIELD_VALUE},
		)
	}
	bind = {"value": name}
	match field_type:
		case "textarea":
			control = textarea(
				id=field_id,
				name=name,
				placeholder=placeholder,
				required=required,
				className=f"{INPUT_CLASS} resize-y",
				rows=entry.get("rows") or 4,
				events=on_change,
				bind=bind,
			)
		case "select":
			control = select(
				[select_option(opt) for opt in entry.get("options") or []],
				id=field_id,
				name=name,
				required=required,
				className=INPUT_CLASS,
				events=on_change,
				bind=bind,
			)
		case _:
			control = input_(
				id=field_id,
				type=field_type,
				name=name,
				placeholder=placeholder,
				required=required,
				className=INPUT_CLASS,
				events=on_change,
				bind=bind,
			)
	return [label_node, control, div(className="mb-4")]


def select_option(opt: str | Mapping[str, Any]) -> Node:
	if isinstance(opt, str):
		return option(opt, value=opt)
	value = opt.get("value")
	return option(cell_text(opt.get("label") or value), value=value)


# ----------------------------------------------------------------------
# Dashboard and chart
# ----------------------------------------------------------------------


def dashboard(cards: Sequence[Mapping[str, Any]], *, title: str = "Dashboard") -> Node:
	return div(
		h3(title, className=TITLE_CLASS),
		div(
			[dashboard_card(card) for card in cards],
			className="grid grid-cols-1 md:grid-cols-2 gap-4",
		),
		className="dynamic-dashboard",
	)


def dashboard_card(card: Mapping[str, Any]) -> Node:
	heading = h4(card.get("title"), className="text-md font-medium mb-2")
	if card.get("type") == "chart":
		body = div(
			p(chart_label(card.get("chartType")), className="text-gray-500"),
			className="h-40 bg-gray-100 flex items-center justify-center",
		)
	else:
		body = p(card.get("content"))
	return div(
		heading,
		body,
		className="bg-white rounded-lg border border-gray-200 shadow-sm p-6 h-full",
	)


def chart(
	*, title: str = "Chart", chart_type: str | None = None, data: Any = None
) -> Node:
	return div(
		h3(title, className=TITLE_CLASS),
		div(
			p(chart_label(chart_type), className="text-gray-500"),
			className="h-60 bg-gray-100 rounded-lg flex items-center justify-center",
		),
		div(
			h4("Data", className="text-sm font-medium mb-2"),
			pre(
				json.dumps(data if data is not None else SAMPLE_CHART_DATA, indent=2),
				className="bg-gray-50 p-2 rounded text-xs overflow-auto",
			),
			className="mt-4",
		),
		className="dynamic-chart",
	)


def chart_label(chart_type: str | None) -> str:
	return f"{chart_type or 'Bar'} Chart Visualization (Placeholder)"


# ----------------------------------------------------------------------
# Table
# ----------------------------------------------------------------------


def table(
	headers: Sequence[Any], rows: Sequence[Sequence[Any]], *, title: str = "Data Table"
) -> Node:
	# Rows are rendered as given: no padding or truncation to the header count
	header_cells = [
		th(
			cell_text(header),
			scope="col",
			className="px-6 py-3 text-left text-xs font-medium text-gray-500 uppercase tracking-wider",
		)
		for header in headers
	]
	body_rows = [
		tr(
			[
				td(cell_text(cell), className="px-6 py-4 whitespace-nowrap text-sm text-gray-500")
				for cell in row
			]
		)
		for row in rows
	]
	return div(
		h3(title, className=TITLE_CLASS),
		div(
			table_tag(
				thead(tr(header_cells), className="bg-gray-50"),
				tbody(body_rows, className="bg-white divide-y divide-gray-200"),
				className="min-w-full divide-y divide-gray-200",
			),
			className="overflow-x-auto",
		),
		className="dynamic-table",
	)


def cell_text(value: Any) -> str:
	if value is None:
		return ""
	if isinstance(value, str):
		return value
	return json.dumps(value)


__all__ = [
	"ARCHETYPES",
	"build",
	"build_envelope",
	"chart",
	"dashboard",
	"form",
	"table",
]
