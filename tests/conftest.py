"""Shared fixtures: an event hub and a scripted page that plays CDP event sequences."""

import asyncio
import itertools
from typing import Any
from urllib.parse import urldefrag

import pytest

from navwait.browser.event_hub import EventHub
from navwait.browser.events import (
	LifecycleMilestoneEvent,
	NavigationEvent,
	PageLoadedEvent,
	RequestSentEvent,
	ResponseReceivedEvent,
)
from navwait.browser.profile import WaitProfile


class FakePage:
	"""Page double that answers navigate/reload with the events Chrome would emit.

	responses maps a URL to the statuses served on successive loads; the last
	status repeats once the list is exhausted. URLs without an entry get 200.
	"""

	def __init__(self, hub: EventHub, session_id: str | None = None):
		self.hub = hub
		self.session_id = session_id
		self.frame_id = 'FRAME-MAIN'
		self.responses: dict[str, list[int]] = {}
		self.links: dict[str, str] = {}
		self.current_url = 'about:blank'
		self.calls: list[tuple[str, Any]] = []
		self._ids = itertools.count(1)
		self._tasks: set[asyncio.Task] = set()

	async def navigate(self, url: str) -> None:
		self.calls.append(('navigate', url))
		self.current_url = url
		self._load(url)

	async def reload(self, ignore_cache: bool = False) -> None:
		self.calls.append(('reload', ignore_cache))
		self._load(self.current_url)

	async def get_current_url(self) -> str:
		return self.current_url

	async def click(self, selector: str) -> None:
		self.calls.append(('click', selector))
		await self.navigate(self.links[selector])

	@property
	def reload_calls(self) -> list[Any]:
		return [arg for name, arg in self.calls if name == 'reload']

	def next_status(self, url: str) -> int:
		statuses = self.responses.get(url)
		if not statuses:
			return 200
		return statuses.pop(0) if len(statuses) > 1 else statuses[0]

	def document_events(self, url: str, status: int) -> list[NavigationEvent]:
		# Chrome leaves the fragment out of network events
		url = urldefrag(url).url
		n = next(self._ids)
		request_id, loader_id = f'REQ-{n}', f'LOADER-{n}'
		common = {'session_id': self.session_id}
		return [
			RequestSentEvent(
				request_id=request_id,
				url=url,
				resource_type='Document',
				loader_id=loader_id,
				frame_id=self.frame_id,
				**common,
			),
			ResponseReceivedEvent(
				request_id=request_id,
				url=url,
				status=status,
				loader_id=loader_id,
				frame_id=self.frame_id,
				resource_type='Document',
				**common,
			),
			LifecycleMilestoneEvent(name='DOMContentLoaded', loader_id=loader_id, frame_id=self.frame_id, **common),
			PageLoadedEvent(**common),
		]

	def play(self, events: list[NavigationEvent]) -> None:
		"""Dispatch events one per loop iteration, after the current command returns."""
		task = asyncio.get_running_loop().create_task(self._play(events))
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)

	def _load(self, url: str) -> None:
		self.play(self.document_events(url, self.next_status(url)))

	async def _play(self, events: list[NavigationEvent]) -> None:
		for event in events:
			await asyncio.sleep(0)
			self.hub.dispatch(event)

	async def close(self) -> None:
		for task in list(self._tasks):
			task.cancel()
		await asyncio.gather(*self._tasks, return_exceptions=True)


@pytest.fixture
def event_hub() -> EventHub:
	return EventHub()


@pytest.fixture
async def fake_page(event_hub: EventHub):
	page = FakePage(event_hub)
	yield page
	await page.close()


@pytest.fixture
def fast_profile() -> WaitProfile:
	return WaitProfile(response_timeout=2.0, load_timeout=2.0, reload_interval=0.01, strict_statuses=frozenset({400, 410}))
