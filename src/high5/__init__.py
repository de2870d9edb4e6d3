from .agent import AgentResponse, respond
from .builder import build, build_envelope
from .client import ApiClient, HttpApiClient, LocalApiClient
from .documents import DocumentStore, InMemoryDocumentStore
from .env import env
from .errors import ApiError, Diagnostic, ErrorCode, Errors
from .events import EventChannel, EventTrigger
from .host import ChatHost, ChatMessage
from .interpreter import Interpreter, Mount
from .legacy import build_flat
from .nodes import (
	CURRENT_FIELD_CHECKED,
	CURRENT_FIELD_VALUE,
	EMPTY,
	Content,
	CurrentFieldChecked,
	CurrentFieldValue,
	Empty,
	EventAction,
	EventDescriptor,
	LegacyDefinition,
	Many,
	Node,
	RenderableDefinition,
	ServerRendered,
	Single,
	Text,
	parse_definition,
)
from .renderer import Renderer
from .server import create_app
from .state import StateStore
from .vdom import VDOM, VDOMElement, VDOMNode
