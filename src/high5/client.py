"""
API clients used by the chat host.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, cast

import httpx

from high5.documents import DocumentStore, InMemoryDocumentStore
from high5.env import env
from high5.errors import ApiError
from high5.server import (
	GenerateUIResult,
	ProcessMessageResult,
	generate_ui,
	process_message,
)

logger = logging.getLogger(__name__)


class ApiClient(Protocol):
	async def send_message(
		self, message: str, conversation_id: str, user_id: str = "anonymous"
	) -> ProcessMessageResult: ...

	async def generate_ui(
		self,
		ui_type: str,
		parameters: dict[str, Any] | None = None,
		user_id: str = "anonymous",
	) -> GenerateUIResult: ...


class HttpApiClient:
	"""
	Talks to a running High5 API over HTTP.
	"""

	base_url: str
	_client: httpx.AsyncClient | None

	def __init__(
		self,
		base_url: str | None = None,
		*,
		client: httpx.AsyncClient | None = None,
	):
		"""
		Args:
		    base_url: API root, defaults to HIGH5_API_BASE_URL
		    client: Preconfigured client (e.g. with a mock transport)
		"""
		self.base_url = (base_url or env.api_base_url).rstrip("/")
		self._client = client

	@property
	def client(self) -> httpx.AsyncClient:
		"""Lazy initialization of HTTP client."""
		if self._client is None:
			self._client = httpx.AsyncClient(timeout=httpx.Timeout(30.0))
		return self._client

	async def send_message(
		self, message: str, conversation_id: str, user_id: str = "anonymous"
	) -> ProcessMessageResult:
		body = await self._post(
			"/agent/process",
			{"message": message, "conversationId": conversation_id, "userId": user_id},
		)
		return cast(ProcessMessageResult, body)

	async def generate_ui(
		self,
		ui_type: str,
		parameters: dict[str, Any] | None = None,
		user_id: str = "anonymous",
	) -> GenerateUIResult:
		body = await self._post(
			"/ui/generate",
			{"type": ui_type, "parameters": parameters or {}, "userId": user_id},
		)
		return cast(GenerateUIResult, body)

	async def _post(self, path: str, payload: dict[str, Any]) -> Any:
		response = await self.client.post(f"{self.base_url}{path}", json=payload)
		if response.is_error:
			try:
				body = response.json()
			except ValueError:
				body = response.text
			logger.error("POST %s failed with %s", path, response.status_code)
			raise ApiError(response.status_code, body)
		return response.json()

	async def close(self):
		"""Close the HTTP client."""
		if self._client is not None:
			await self._client.aclose()


class LocalApiClient:
	"""
	Runs the service functions in-process, for development and demos.
	"""

	store: DocumentStore

	def __init__(self, store: DocumentStore | None = None):
		self.store = store if store is not None else InMemoryDocumentStore()

	async def send_message(
		self, message: str, conversation_id: str, user_id: str = "anonymous"
	) -> ProcessMessageResult:
		return process_message(self.store, message, conversation_id, user_id)

	async def generate_ui(
		self,
		ui_type: str,
		parameters: dict[str, Any] | None = None,
		user_id: str = "anonymous",
	) -> GenerateUIResult:
		return generate_ui(self.store, ui_type, parameters, user_id)

	async def close(self):
		pass


__all__ = ["ApiClient", "HttpApiClient", "LocalApiClient"]
