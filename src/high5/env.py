"""Environment-backed settings.

Every setting is read from `os.environ` on access, so tests and the CLI can
change them at runtime through `env.update(...)` or by setting the variables
directly.
"""

from __future__ import annotations

import os
from typing import Literal, cast

ENV_HIGH5_ENV = "HIGH5_ENV"
ENV_HIGH5_HOST = "HIGH5_HOST"
ENV_HIGH5_PORT = "HIGH5_PORT"
ENV_HIGH5_TABLE = "HIGH5_TABLE"
ENV_HIGH5_HISTORY_LIMIT = "HIGH5_HISTORY_LIMIT"
ENV_HIGH5_LOG_LEVEL = "HIGH5_LOG_LEVEL"
ENV_HIGH5_API_BASE_URL = "HIGH5_API_BASE_URL"

High5Env = Literal["dev", "ci", "prod"]

_ENVS: tuple[High5Env, ...] = ("dev", "ci", "prod")


def _int(name: str, default: int) -> int:
	raw = os.environ.get(name)
	if raw is None or not raw.strip():
		return default
	try:
		return int(raw)
	except ValueError:
		raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class EnvVars:
	@property
	def high5_env(self) -> High5Env:
		value = os.environ.get(ENV_HIGH5_ENV, "dev").lower()
		if value not in _ENVS:
			raise ValueError(
				f"{ENV_HIGH5_ENV} must be one of {', '.join(_ENVS)}, got {value!r}"
			)
		return cast(High5Env, value)

	@high5_env.setter
	def high5_env(self, value: High5Env) -> None:
		os.environ[ENV_HIGH5_ENV] = value

	@property
	def host(self) -> str:
		return os.environ.get(ENV_HIGH5_HOST, "localhost")

	@property
	def port(self) -> int:
		return _int(ENV_HIGH5_PORT, 8000)

	@property
	def table(self) -> str:
		return os.environ.get(ENV_HIGH5_TABLE, "high5")

	@property
	def messages_table(self) -> str:
		return f"{self.table}-messages"

	@property
	def ui_components_table(self) -> str:
		return f"{self.table}-ui-components"

	@property
	def history_limit(self) -> int:
		return _int(ENV_HIGH5_HISTORY_LIMIT, 10)

	@property
	def log_level(self) -> str:
		return os.environ.get(ENV_HIGH5_LOG_LEVEL, "INFO").upper()

	@property
	def api_base_url(self) -> str:
		return os.environ.get(ENV_HIGH5_API_BASE_URL, "http://localhost:8000")

	def update(self, values: dict[str, str]) -> None:
		os.environ.update(values)


env = EnvVars()

__all__ = [
	"ENV_HIGH5_API_BASE_URL",
	"ENV_HIGH5_ENV",
	"ENV_HIGH5_HISTORY_LIMIT",
	"ENV_HIGH5_HOST",
	"ENV_HIGH5_LOG_LEVEL",
	"ENV_HIGH5_PORT",
	"ENV_HIGH5_TABLE",
	"EnvVars",
	"High5Env",
	"env",
]
