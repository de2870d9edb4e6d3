from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from high5.env import env

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class DocumentStore(Protocol):
	def put(self, table: str, item: Mapping[str, Any]) -> None: ...
	def query(
		self,
		table: str,
		index: str,
		value: Any,
		limit: int | None = None,
		newest_first: bool = False,
	) -> list[Document]: ...


class InMemoryDocumentStore:
	"""Tables of documents kept in insertion order.

	`query` filters on one attribute and orders by the `timestamp` attribute
	(ISO strings sort chronologically). Documents without a timestamp keep
	their insertion order.
	"""

	def __init__(self) -> None:
		self._tables: dict[str, list[Document]] = {}

	def put(self, table: str, item: Mapping[str, Any]) -> None:
		logger.debug("put %s id=%s", table, item.get("id"))
		self._tables.setdefault(table, []).append(dict(item))

	def query(
		self,
		table: str,
		index: str,
		value: Any,
		limit: int | None = None,
		newest_first: bool = False,
	) -> list[Document]:
		items = [dict(doc) for doc in self._tables.get(table, []) if doc.get(index) == value]
		items.sort(key=lambda doc: str(doc.get("timestamp", "")), reverse=newest_first)
		if limit is not None:
			items = items[:limit]
		return items

	def tables(self) -> list[str]:
		return list(self._tables)

	def clear(self) -> None:
		self._tables.clear()


def get_conversation_history(
	store: DocumentStore, conversation_id: str, limit: int | None = None
) -> list[Document]:
	"""Most recent messages of a conversation, newest first."""
	return store.query(
		env.messages_table,
		"conversationId",
		conversation_id,
		limit=limit if limit is not None else env.history_limit,
		newest_first=True,
	)


def store_message(store: DocumentStore, message: Mapping[str, Any]) -> Document:
	store.put(env.messages_table, message)
	return dict(message)


def store_ui_component(store: DocumentStore, component: Mapping[str, Any]) -> Document:
	store.put(env.ui_components_table, component)
	return dict(component)


def get_ui_components_by_type(
	store: DocumentStore, component_type: str, limit: int = 10
) -> list[Document]:
	return store.query(env.ui_components_table, "type", component_type, limit=limit)


__all__ = [
	"Document",
	"DocumentStore",
	"InMemoryDocumentStore",
	"get_conversation_history",
	"get_ui_components_by_type",
	"store_message",
	"store_ui_component",
]
