"""Supported tags and definition-side tag constructors.

`Tag` is the closed capability table of the client runtime. The constructors
below (`div`, `form`, `input_`, ...) build definition `Node`s, which is how the
builder authors trees:

    form(
        label("Name", htmlFor="field-name"),
        input_(name="name", bind={"value": "name"}),
        events={"onSubmit": EventDescriptor(action="preventDefault")},
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from high5.nodes import EMPTY, ChildInput, EventDescriptor, Node, content_of


class Tag(StrEnum):
	DIV = "div"
	SPAN = "span"
	P = "p"
	PRE = "pre"
	H1 = "h1"
	H2 = "h2"
	H3 = "h3"
	H4 = "h4"
	H5 = "h5"
	H6 = "h6"
	BUTTON = "button"
	INPUT = "input"
	TEXTAREA = "textarea"
	SELECT = "select"
	OPTION = "option"
	A = "a"
	IMG = "img"
	UL = "ul"
	OL = "ol"
	LI = "li"
	TABLE = "table"
	THEAD = "thead"
	TBODY = "tbody"
	TR = "tr"
	TH = "th"
	TD = "td"
	FORM = "form"
	LABEL = "label"
	FIELDSET = "fieldset"
	LEGEND = "legend"


# Elements that can never hold children
VOID_TAGS: frozenset[Tag] = frozenset({Tag.INPUT, Tag.IMG})


@dataclass(frozen=True, slots=True)
class Unknown:
	"""A type tag outside the capability table."""

	tag: str


def resolve_tag(name: str) -> Tag | Unknown:
	try:
		return Tag(name)
	except ValueError:
		return Unknown(name)


class TagConstructor(Protocol):
	def __call__(
		self,
		*children: ChildInput,
		events: Mapping[str, EventDescriptor] | None = None,
		bind: Mapping[str, str] | None = None,
		**props: Any,
	) -> Node: ...


def define_tag(name: str, default_props: dict[str, Any] | None = None) -> TagConstructor:
	"""
	Define a constructor for definition nodes of the given tag.

	Args:
	    name: The tag name (e.g., "div", "span")
	    default_props: Default props to apply to all instances

	Returns:
	    A function that creates `Node` instances
	"""

	def create_node(
		*children: ChildInput,
		events: Mapping[str, EventDescriptor] | None = None,
		bind: Mapping[str, str] | None = None,
		**props: Any,
	) -> Node:
		if default_props:
			props = default_props | props
		if not children:
			content = EMPTY
		elif len(children) == 1:
			content = content_of(children[0])
		else:
			content = content_of(list(children))
		return Node(
			type=str(name),
			props=props,
			children=content,
			events=dict(events or {}),
			state_bindings=dict(bind or {}),
		)

	return create_node


def define_self_closing_tag(
	name: str, default_props: dict[str, Any] | None = None
) -> Callable[..., Node]:
	"""Like `define_tag`, for tags that never take children."""
	create = define_tag(name, default_props)

	def create_node(
		*,
		events: Mapping[str, EventDescriptor] | None = None,
		bind: Mapping[str, str] | None = None,
		**props: Any,
	) -> Node:
		return create(events=events, bind=bind, **props)

	return create_node


div = define_tag(Tag.DIV)
span = define_tag(Tag.SPAN)
p = define_tag(Tag.P)
pre = define_tag(Tag.PRE)
h1 = define_tag(Tag.H1)
h2 = define_tag(Tag.H2)
h3 = define_tag(Tag.H3)
h4 = define_tag(Tag.H4)
h5 = define_tag(Tag.H5)
h6 = define_tag(Tag.H6)
button = define_tag(Tag.BUTTON)
textarea = define_tag(Tag.TEXTAREA)
select = define_tag(Tag.SELECT)
option = define_tag(Tag.OPTION)
a = define_tag(Tag.A)
ul = define_tag(Tag.UL)
ol = define_tag(Tag.OL)
li = define_tag(Tag.LI)
table = define_tag(Tag.TABLE)
thead = define_tag(Tag.THEAD)
tbody = define_tag(Tag.TBODY)
tr = define_tag(Tag.TR)
th = define_tag(Tag.TH)
td = define_tag(Tag.TD)
form = define_tag(Tag.FORM)
label = define_tag(Tag.LABEL)
fieldset = define_tag(Tag.FIELDSET)
legend = define_tag(Tag.LEGEND)

# `input` shadows the builtin
input_ = define_self_closing_tag(Tag.INPUT)
img = define_self_closing_tag(Tag.IMG)


__all__ = [
	"VOID_TAGS",
	"Tag",
	"TagConstructor",
	"Unknown",
	"a",
	"button",
	"define_self_closing_tag",
	"define_tag",
	"div",
	"fieldset",
	"form",
	"h1",
	"h2",
	"h3",
	"h4",
	"h5",
	"h6",
	"img",
	"input_",
	"label",
	"legend",
	"li",
	"ol",
	"option",
	"p",
	"pre",
	"resolve_tag",
	"select",
	"span",
	"table",
	"tbody",
	"td",
	"textarea",
	"th",
	"thead",
	"tr",
	"ul",
]
