"""Trigger actions run after a wait has armed its listener."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from navwait.utils import to_string

if TYPE_CHECKING:
	from navwait.navigation.views import PageCommands

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any] | Any]


async def run_actions(actions: Sequence[Action]) -> None:
	"""Run actions in order; the first exception aborts the rest and propagates."""
	for action in actions:
		result = action()
		if inspect.isawaitable(result):
			await result


def navigate_action(page: 'PageCommands', url: Any) -> Action:
	async def navigate() -> None:
		await page.navigate(to_string(url))

	return navigate


def reload_action(page: 'PageCommands', ignore_cache: bool = False) -> Action:
	async def reload() -> None:
		await page.reload(ignore_cache=ignore_cache)

	return reload


def click_action(page: 'PageCommands', selector: str) -> Action:
	async def click() -> None:
		await page.click(selector)

	return click
