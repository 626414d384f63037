"""String helpers for building navigation targets lazily."""

from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit, urlunsplit


class Stringer:
	"""Defers building a string until it is formatted.

	Actions are usually declared before earlier steps have produced the values
	they need (an id read from the page, a redirect target), so URLs are kept as
	recipes and resolved when the wait starts.
	"""

	def __init__(self, func: Callable[[], str]):
		self._func = func

	def __str__(self) -> str:
		return self._func()

	def __repr__(self) -> str:
		return f'Stringer({self._func()!r})'


def to_string(value: Any) -> str:
	"""Resolve a str, Stringer or zero-argument callable to a plain string."""
	if value is None:
		return ''
	if isinstance(value, str):
		return value
	if callable(value):
		return str(value())
	return str(value)


def url(endpoint: str, path: str, *values: Any) -> Stringer:
	"""Return a Stringer joining endpoint and path.

	When values are given, path is a %-format string and each value is resolved
	with to_string at format time.
	"""
	parts = urlsplit(endpoint)
	if not parts.scheme:
		raise ValueError(f'endpoint must be an absolute URL: {endpoint!r}')

	def build() -> str:
		formatted = path % tuple(to_string(v) for v in values) if values else path
		return urlunsplit((parts.scheme, parts.netloc, formatted, parts.query, parts.fragment))

	return Stringer(build)
