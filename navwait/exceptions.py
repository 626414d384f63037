"""Errors raised by navwait waits and helpers."""


class NavWaitError(Exception):
	"""Base class for navwait errors."""


class NavigationFailedError(NavWaitError):
	"""The awaited document answered with a status that is not worth retrying."""

	def __init__(self, message: str, url: str, status: int | None = None):
		super().__init__(message)
		self.url = url
		self.status = status


class NavigationTimeoutError(NavWaitError):
	"""Raised instead of a soft timeout when the profile asks for strict waits."""

	def __init__(self, url: str | None, timeout: float):
		super().__init__(f'timeout exceeded after {timeout}s url={url}')
		self.url = url
		self.timeout = timeout


class CanceledByUserError(NavWaitError):
	"""The user declined a confirmation prompt."""

	def __init__(self, message: str = 'canceled by user'):
		super().__init__(message)
