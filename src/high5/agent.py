"""Keyword agent.

Stands in for a language model: it picks a canned reply by keyword and, for
UI-related messages, suggests which archetype the host should request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

GREETING = "Hello! I'm High5, your AI assistant. How can I help you today?"
WELCOME = "Hello! I am High5, your AI assistant. How can I help you today?"


@dataclass(slots=True)
class AgentResponse:
	content: str
	metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Rule:
	keywords: tuple[str, ...]
	content: str
	parameters: dict[str, Any] | None = None

	def matches(self, text: str) -> bool:
		return any(re.search(rf"\b{re.escape(word)}\b", text) for word in self.keywords)

	def respond(self) -> AgentResponse:
		if self.parameters is None:
			return AgentResponse(self.content)
		return AgentResponse(
			self.content,
			{"suggestedAction": "generateUI", "parameters": dict(self.parameters)},
		)


# First match wins
RULES: tuple[Rule, ...] = (
	Rule(("hello", "hi"), GREETING),
	Rule(("help",), "I can help you with various tasks. Just let me know what you need!"),
	Rule(
		("ui", "interface"),
		"I can generate UI components dynamically based on your needs. "
		"Would you like me to create a form, dashboard, chart, or table?",
		{"type": "form", "fields": ["name", "email", "message"]},
	),
	Rule(
		("form",),
		"I'll create a form for you. What fields would you like to include?",
		{"type": "form", "fields": ["name", "email", "message"]},
	),
	Rule(
		("dashboard",),
		"I'll generate a dashboard for you with some sample data.",
		{"type": "dashboard"},
	),
	Rule(
		("chart",),
		"I'll create a chart visualization for you.",
		{"type": "chart", "chartType": "bar"},
	),
	Rule(("table",), "I'll generate a data table for you.", {"type": "table"}),
)


def respond(message: str, history: list[dict[str, Any]] | None = None) -> AgentResponse:
	"""Reply to `message`. `history` is accepted for context but unused."""
	text = message.lower()
	for rule in RULES:
		if rule.matches(text):
			return rule.respond()
	return AgentResponse(
		f'I\'ve processed your message: "{message}". In a full implementation, '
		"I would use an LLM or other AI service to generate a more contextual response."
	)


__all__ = ["GREETING", "RULES", "WELCOME", "AgentResponse", "Rule", "respond"]
