"""Per-session wait settings."""

from pydantic import BaseModel, ConfigDict, Field

from navwait.config import CONFIG


class WaitProfile(BaseModel):
	"""Explicit configuration handed to a NavigationWatcher or BrowserSession.

	Defaults come from CONFIG so environment overrides apply, but nothing reads
	global state after construction.
	"""

	model_config = ConfigDict(extra='forbid', validate_assignment=True)

	response_timeout: float = Field(
		default_factory=lambda: CONFIG.NAVWAIT_RESPONSE_TIMEOUT,
		ge=0,
		description='Seconds to wait for the awaited document before giving up',
	)
	load_timeout: float = Field(
		default_factory=lambda: CONFIG.NAVWAIT_LOAD_TIMEOUT,
		ge=0,
		description='Seconds wait_for_load waits for a load event',
	)
	reload_interval: float = Field(
		default_factory=lambda: CONFIG.NAVWAIT_RELOAD_INTERVAL,
		gt=0,
		description='Minimum spacing between reload commands',
	)
	reload_ignore_cache: bool = Field(default=False, description='Bypass the cache when reloading after a transient failure')
	strict_statuses: frozenset[int] = Field(
		default_factory=lambda: CONFIG.strict_statuses,
		description='HTTP statuses that fail the wait instead of triggering a reload',
	)
	raise_on_timeout: bool = Field(default=False, description='Raise NavigationTimeoutError instead of returning a timed out outcome')
	main_document_only: bool = Field(default=False, description='Only correlate requests whose resource type is Document')
