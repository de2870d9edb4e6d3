"""Chat host: the application around the interpreter.

Keeps the conversation, asks the API for replies, mounts whatever UI the agent
suggests and turns form submissions back into chat messages.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from high5.agent import WELCOME
from high5.client import ApiClient
from high5.interpreter import Interpreter, Mount
from high5.nodes import LegacyDefinition

logger = logging.getLogger(__name__)

Sender = Literal["user", "agent"]
MessageStatus = Literal["sending", "sent", "error"]

SEND_ERROR = "Sorry, there was an error processing your message. Please try again."
GENERATE_ERROR = (
	"Sorry, there was an error generating the UI components. Please try again."
)


@dataclass(slots=True)
class ChatMessage:
	content: str
	sender: Sender
	id: str = field(default_factory=lambda: str(uuid.uuid4()))
	timestamp: str = field(default_factory=lambda: datetime.now().strftime("%H:%M:%S"))
	status: MessageStatus | None = None
	metadata: dict[str, Any] | None = None


@dataclass(slots=True)
class Conversation:
	id: str
	title: str = "New conversation"
	active: bool = True


class ChatHost:
	client: ApiClient
	interpreter: Interpreter
	messages: list[ChatMessage]
	conversations: list[Conversation]
	loading: bool

	def __init__(self, client: ApiClient) -> None:
		self.client = client
		self.interpreter = Interpreter(self.on_event)
		self.messages = [welcome_message()]
		self.conversations = [Conversation(id="1")]
		self.loading = False

	@property
	def conversation_id(self) -> str:
		for conversation in self.conversations:
			if conversation.active:
				return conversation.id
		return "1"

	@property
	def mount(self) -> Mount | None:
		return self.interpreter.current

	async def send_message(self, content: str) -> ChatMessage:
		user_message = ChatMessage(content=content, sender="user", status="sending")
		self.messages.append(user_message)
		self.loading = True
		try:
			response = await self.client.send_message(content, self.conversation_id)
			user_message.status = "sent"
			metadata = response.get("metadata") or {}
			self.messages.append(
				ChatMessage(
					id=response.get("messageId") or str(uuid.uuid4()),
					content=response["content"],
					sender="agent",
					metadata=metadata,
				)
			)
			if metadata.get("suggestedAction") == "generateUI":
				await self.generate_ui(metadata.get("parameters") or {})
			else:
				self.interpreter.mount(None)
		except Exception:
			logger.exception("Error sending message")
			user_message.status = "error"
			self.messages.append(ChatMessage(content=SEND_ERROR, sender="agent"))
		finally:
			self.loading = False
		return user_message

	async def generate_ui(self, parameters: dict[str, Any]) -> Mount | None:
		try:
			response = await self.client.generate_ui(parameters.get("type", ""), parameters)
		except Exception:
			logger.exception("Error generating UI")
			self.messages.append(ChatMessage(content=GENERATE_ERROR, sender="agent"))
			return None
		return self.interpreter.mount(response.get("components"))

	def on_event(self, event_name: str, payload: dict[str, Any]) -> None:
		if event_name != "submit":
			logger.debug("Ignoring UI event %r", event_name)
			return
		# Flat forms emit their data as is, server-rendered trees wrap it in "state"
		mount = self.mount
		if mount is not None and isinstance(mount.definition, LegacyDefinition):
			data: Any = payload
		else:
			data = payload.get("state", {})
		self.messages.append(
			ChatMessage(
				content=f"Form submitted with data: {json.dumps(data, indent=2)}",
				sender="user",
				status="sent",
			)
		)
		self.interpreter.mount(None)

	def new_conversation(self) -> Conversation:
		for conversation in self.conversations:
			conversation.active = False
		conversation = Conversation(id=str(uuid.uuid4()))
		self.conversations.insert(0, conversation)
		self.messages = [welcome_message()]
		self.interpreter.mount(None)
		return conversation


def welcome_message() -> ChatMessage:
	return ChatMessage(content=WELCOME, sender="agent")


__all__ = ["ChatHost", "ChatMessage", "Conversation", "welcome_message"]
