"""Data models for navigation waits."""

from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class PageCommands(Protocol):
	"""Commands a navigation wait needs from the page it watches."""

	async def navigate(self, url: str) -> None: ...

	async def reload(self, ignore_cache: bool = False) -> None: ...

	async def get_current_url(self) -> str: ...

	async def click(self, selector: str) -> None: ...


class CorrelationKeys(BaseModel):
	"""Identifiers tying later events to the awaited request and document."""

	model_config = ConfigDict(validate_assignment=True)

	request_id: str | None = None
	loader_id: str | None = None
	frame_id: str | None = None

	@property
	def has_request(self) -> bool:
		return self.request_id is not None

	@property
	def has_document(self) -> bool:
		return self.loader_id is not None


class EventClass(str, Enum):
	"""How a single event relates to the awaited navigation."""

	PENDING = 'pending'
	RETRYABLE = 'retryable'
	FATAL = 'fatal'
	COMPLETED = 'completed'


class Classification(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: EventClass
	reason: str | None = None
	status: int | None = None


PENDING = Classification(kind=EventClass.PENDING)


class VerdictKind(str, Enum):
	PENDING = 'pending'
	SUCCESS = 'success'
	FAILURE = 'failure'
	RELOAD_REQUESTED = 'reload_requested'


class Verdict(BaseModel):
	"""Decision taken by the completion policy for one event."""

	model_config = ConfigDict(frozen=True)

	kind: VerdictKind
	reason: str | None = None
	status: int | None = None

	@property
	def is_terminal(self) -> bool:
		return self.kind in (VerdictKind.SUCCESS, VerdictKind.FAILURE)

	@classmethod
	def pending(cls) -> 'Verdict':
		return cls(kind=VerdictKind.PENDING)

	@classmethod
	def success(cls) -> 'Verdict':
		return cls(kind=VerdictKind.SUCCESS)

	@classmethod
	def failure(cls, reason: str, status: int | None = None) -> 'Verdict':
		return cls(kind=VerdictKind.FAILURE, reason=reason, status=status)

	@classmethod
	def reload(cls) -> 'Verdict':
		return cls(kind=VerdictKind.RELOAD_REQUESTED)


class NavigationStatus(str, Enum):
	LOADED = 'loaded'
	TIMED_OUT = 'timed_out'


class NavigationOutcome(BaseModel):
	"""Result of a wait that did not fail."""

	url: str | None = Field(default=None, description='Awaited URL prefix, None for load-only waits')
	status: NavigationStatus
	reloads: int = Field(default=0, description='Reload commands issued while waiting')
	elapsed_time: float = Field(default=0.0, description='Seconds from arming the listener to the outcome')

	@property
	def timed_out(self) -> bool:
		return self.status is NavigationStatus.TIMED_OUT
