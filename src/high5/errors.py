from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

ErrorCode = Literal[
	"binding.missing",
	"render.unknown_tag",
	"builder.archetype",
	"event.descriptor",
	"event.unknown_callback",
	"event.handler",
	"definition.malformed",
]

# Codes that describe recoverable input problems rather than bugs. They are
# logged below ERROR so a noisy definition does not flood the logs.
_LOG_LEVELS: dict[ErrorCode, int] = {
	"binding.missing": logging.DEBUG,
	"builder.archetype": logging.INFO,
	"render.unknown_tag": logging.WARNING,
	"event.descriptor": logging.WARNING,
	"event.unknown_callback": logging.WARNING,
	"event.handler": logging.ERROR,
	"definition.malformed": logging.ERROR,
}


def _format_stack(exc: BaseException) -> str:
	return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


@dataclass(slots=True)
class Diagnostic:
	code: ErrorCode
	message: str
	details: dict[str, Any] = field(default_factory=dict)
	stack: str | None = None


class Errors:
	"""Error reporter bound to one mounted definition.

	Nothing reported here is re-raised: the interpreter degrades instead of
	aborting, and the host inspects `diagnostics` if it cares.
	"""

	__slots__: tuple[str, ...] = ("diagnostics", "_mount_id", "_seen")
	diagnostics: list[Diagnostic]
	_mount_id: str | None
	_seen: dict[tuple[str, str], Diagnostic]

	def __init__(self, mount_id: str | None = None) -> None:
		self.diagnostics = []
		self._mount_id = mount_id
		self._seen = {}

	def report(
		self,
		code: ErrorCode,
		message: str,
		*,
		details: dict[str, Any] | None = None,
		exc: BaseException | None = None,
		once_key: str | None = None,
	) -> Diagnostic:
		"""Record and log a diagnostic.

		With `once_key`, repeated reports of the same code and key (e.g. on every
		re-render) return the first diagnostic without logging again.
		"""
		if once_key is not None:
			seen = self._seen.get((code, once_key))
			if seen is not None:
				return seen

		payload_details = dict(details) if details is not None else {}
		if self._mount_id is not None:
			payload_details.setdefault("mount_id", self._mount_id)

		stack = _format_stack(exc) if exc is not None else None
		diagnostic = Diagnostic(
			code=code, message=message, details=payload_details, stack=stack
		)
		self.diagnostics.append(diagnostic)
		if once_key is not None:
			self._seen[(code, once_key)] = diagnostic

		level = _LOG_LEVELS.get(code, logging.ERROR)
		if stack is not None:
			logger.log(
				level,
				"High5 error code=%s message=%s details=%s\n%s",
				code,
				message,
				payload_details,
				stack,
			)
		else:
			logger.log(
				level,
				"High5 diagnostic code=%s message=%s details=%s",
				code,
				message,
				payload_details,
			)
		return diagnostic

	def by_code(self, code: ErrorCode) -> list[Diagnostic]:
		return [d for d in self.diagnostics if d.code == code]

	def clear(self) -> None:
		self.diagnostics.clear()
		self._seen.clear()


class ApiError(Exception):
	"""Raised by API clients when the service answers with a non-2xx status."""

	status_code: int
	body: Any

	def __init__(self, status_code: int, body: Any = None) -> None:
		super().__init__(f"API error: {status_code}")
		self.status_code = status_code
		self.body = body


__all__ = ["ApiError", "Diagnostic", "ErrorCode", "Errors"]
