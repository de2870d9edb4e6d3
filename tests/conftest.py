from typing import Any

import pytest
from high5.env import (
	ENV_HIGH5_API_BASE_URL,
	ENV_HIGH5_ENV,
	ENV_HIGH5_HISTORY_LIMIT,
	ENV_HIGH5_HOST,
	ENV_HIGH5_LOG_LEVEL,
	ENV_HIGH5_PORT,
	ENV_HIGH5_TABLE,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	for name in (
		ENV_HIGH5_API_BASE_URL,
		ENV_HIGH5_ENV,
		ENV_HIGH5_HISTORY_LIMIT,
		ENV_HIGH5_HOST,
		ENV_HIGH5_LOG_LEVEL,
		ENV_HIGH5_PORT,
		ENV_HIGH5_TABLE,
	):
		monkeypatch.delenv(name, raising=False)


class EventLog:
	def __init__(self) -> None:
		self.events: list[tuple[str, dict[str, Any]]] = []

	def __call__(self, event_name: str, payload: dict[str, Any]) -> None:
		self.events.append((event_name, payload))


@pytest.fixture
def event_log() -> EventLog:
	return EventLog()
