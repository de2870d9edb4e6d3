"""HTTP service: message processing and UI generation.

The service functions (`process_message`, `generate_ui`) hold the logic and
are shared with `high5.client.LocalApiClient`; `create_app` only maps them to
routes and turns `ApiError`s into JSON error responses.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, NotRequired, TypedDict, cast

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from high5 import agent
from high5.builder import build_envelope
from high5.documents import (
	DocumentStore,
	InMemoryDocumentStore,
	get_conversation_history,
	store_message,
	store_ui_component,
)
from high5.errors import ApiError
from high5.vdom import DefinitionJson

logger = logging.getLogger(__name__)

MISSING_FIELDS = {"error": "Missing required fields"}


class ProcessMessagePayload(TypedDict):
	message: str
	conversationId: str
	userId: NotRequired[str]


class ProcessMessageResult(TypedDict):
	messageId: str
	content: str
	metadata: dict[str, Any]
	timestamp: str


class GenerateUIPayload(TypedDict):
	type: str
	parameters: NotRequired[dict[str, Any]]
	userId: NotRequired[str]


class GenerateUIResult(TypedDict):
	componentId: str
	type: str
	components: DefinitionJson
	timestamp: str


def now_iso() -> str:
	return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
	return str(uuid.uuid4())


def process_message(
	store: DocumentStore,
	message: str | None,
	conversation_id: str | None,
	user_id: str | None = None,
) -> ProcessMessageResult:
	if not message or not conversation_id:
		raise ApiError(400, MISSING_FIELDS)

	user_id = user_id or "anonymous"
	store_message(
		store,
		{
			"id": new_id(),
			"conversationId": conversation_id,
			"userId": user_id,
			"content": message,
			"sender": "user",
			"timestamp": now_iso(),
		},
	)

	history = get_conversation_history(store, conversation_id)
	response = agent.respond(message, history)

	agent_message = store_message(
		store,
		{
			"id": new_id(),
			"conversationId": conversation_id,
			"userId": user_id,
			"content": response.content,
			"sender": "agent",
			"timestamp": now_iso(),
			"metadata": response.metadata,
		},
	)
	return {
		"messageId": agent_message["id"],
		"content": response.content,
		"metadata": response.metadata,
		"timestamp": agent_message["timestamp"],
	}


def generate_ui(
	store: DocumentStore,
	ui_type: str | None,
	parameters: dict[str, Any] | None = None,
	user_id: str | None = None,
) -> GenerateUIResult:
	if not ui_type:
		raise ApiError(400, MISSING_FIELDS)

	components = build_envelope(ui_type, parameters or {})
	component = store_ui_component(
		store,
		{
			"id": new_id(),
			"type": ui_type,
			"userId": user_id or "anonymous",
			"parameters": parameters,
			"components": components,
			"timestamp": now_iso(),
		},
	)
	return {
		"componentId": component["id"],
		"type": ui_type,
		"components": components,
		"timestamp": component["timestamp"],
	}


async def read_payload(request: Request) -> dict[str, Any]:
	try:
		payload = await request.json()
	except ValueError:
		raise ApiError(400, MISSING_FIELDS) from None
	if not isinstance(payload, dict):
		raise ApiError(400, MISSING_FIELDS)
	return cast(dict[str, Any], payload)


def create_app(store: DocumentStore | None = None) -> FastAPI:
	documents: DocumentStore = store if store is not None else InMemoryDocumentStore()

	app = FastAPI(title="High5 API")
	app.state.documents = documents
	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	@app.exception_handler(ApiError)
	async def api_error_handler(_: Request, exc: ApiError):  # pyright: ignore[reportUnusedFunction]
		return JSONResponse(exc.body, status_code=exc.status_code)

	@app.get("/health")
	def healthcheck():  # pyright: ignore[reportUnusedFunction]
		return {"status": "ok"}

	@app.post("/agent/process")
	async def agent_process(request: Request):  # pyright: ignore[reportUnusedFunction]
		"""
		POST /agent/process
		Body: { message: string, conversationId: string, userId?: string }
		Returns: { messageId, content, metadata, timestamp }
		"""
		payload = cast(ProcessMessagePayload, await read_payload(request))
		try:
			return process_message(
				documents,
				payload.get("message"),
				payload.get("conversationId"),
				payload.get("userId"),
			)
		except ApiError:
			raise
		except Exception:
			logger.exception("Error processing message")
			return JSONResponse({"error": "Could not process message"}, status_code=500)

	@app.post("/ui/generate")
	async def ui_generate(request: Request):  # pyright: ignore[reportUnusedFunction]
		"""
		POST /ui/generate
		Body: { type: string, parameters?: object, userId?: string }
		Returns: { componentId, type, components, timestamp }
		"""
		payload = cast(GenerateUIPayload, await read_payload(request))
		try:
			return generate_ui(
				documents,
				payload.get("type"),
				payload.get("parameters"),
				payload.get("userId"),
			)
		except ApiError:
			raise
		except Exception:
			logger.exception("Error generating UI components")
			return JSONResponse(
				{"error": "Could not generate UI components"}, status_code=500
			)

	return app


__all__ = [
	"GenerateUIPayload",
	"GenerateUIResult",
	"ProcessMessagePayload",
	"ProcessMessageResult",
	"create_app",
	"generate_ui",
	"process_message",
]
