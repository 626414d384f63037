"""Navigation completion detection over CDP events."""

import asyncio
import logging
from typing import Any

from navwait.browser.event_hub import EventHub
from navwait.browser.events import NavigationEvent
from navwait.browser.profile import WaitProfile
from navwait.exceptions import NavigationFailedError, NavigationTimeoutError
from navwait.navigation.actions import Action, click_action, navigate_action, reload_action, run_actions
from navwait.navigation.correlator import EventCorrelator
from navwait.navigation.policy import CompletionPolicy
from navwait.navigation.views import NavigationOutcome, NavigationStatus, PageCommands, Verdict, VerdictKind
from navwait.utils import to_string

logger = logging.getLogger(__name__)


class _ReloadTicker:
	"""Fixed-interval ticker anchored at creation time.

	wait() returns at the next tick; a tick that already passed unobserved is
	consumed immediately, and any further missed ticks are dropped.
	"""

	def __init__(self, interval: float):
		self._loop = asyncio.get_running_loop()
		self._interval = interval
		self._next_tick = self._loop.time() + interval

	async def wait(self) -> None:
		now = self._loop.time()
		if now < self._next_tick:
			await asyncio.sleep(self._next_tick - now)
			self._next_tick += self._interval
			return
		missed = int((now - self._next_tick) // self._interval) + 1
		self._next_tick += missed * self._interval


class NavigationWatcher:
	"""Waits for navigations of one page to really complete.

	A wait arms a listener on the event hub, runs the trigger actions, then
	races the verdicts of its completion policy against the timeout. Transient
	failures are retried with a reload until the timeout; only the statuses in
	profile.strict_statuses fail the wait.
	"""

	def __init__(
		self,
		page: PageCommands,
		events: EventHub,
		profile: WaitProfile | None = None,
		session_id: str | None = None,
	):
		self.page = page
		self.events = events
		self.profile = profile or WaitProfile()
		self.session_id = session_id

	async def wait_for_response(self, url: Any, *actions: Action, timeout: float | None = None) -> NavigationOutcome:
		"""Run actions and wait until the document at url has loaded.

		Args:
			url: URL prefix of the awaited document (str, Stringer or callable)
			actions: Triggers run in order after the listener is armed
			timeout: Seconds to wait, defaults to profile.response_timeout

		Returns:
			NavigationOutcome, timed out unless the document was confirmed loaded

		Raises:
			NavigationFailedError: the document answered with a strict status
			NavigationTimeoutError: on timeout, if profile.raise_on_timeout is set
		"""
		target_url = to_string(url)
		timeout = self.profile.response_timeout if timeout is None else timeout
		logger.debug(f'[NavigationWatcher] wait for url={target_url}')

		correlator = EventCorrelator(
			target_url,
			strict_statuses=self.profile.strict_statuses,
			main_document_only=self.profile.main_document_only,
		)
		policy = CompletionPolicy()

		def on_event(event: NavigationEvent) -> None:
			verdict = policy.submit(correlator.classify(event))
			if verdict.kind is VerdictKind.RELOAD_REQUESTED:
				correlator.rearm()

		loop = asyncio.get_running_loop()
		started = loop.time()
		reloads = 0

		with self.events.subscribe(on_event, session_id=self.session_id):
			logger.debug(f'[NavigationWatcher] do action(s)={len(actions)}')
			await run_actions(actions)

			logger.debug(f'[NavigationWatcher] timeout={timeout}s')
			deadline = loop.time() + timeout
			ticker = _ReloadTicker(self.profile.reload_interval)

			while True:
				verdict = await self._next_verdict(policy, deadline - loop.time())

				if verdict is None:
					logger.warning(f'[NavigationWatcher] timeout exceeded url={target_url}')
					if self.profile.raise_on_timeout:
						raise NavigationTimeoutError(target_url, timeout)
					return NavigationOutcome(
						url=target_url,
						status=NavigationStatus.TIMED_OUT,
						reloads=reloads,
						elapsed_time=loop.time() - started,
					)

				if verdict.kind is VerdictKind.FAILURE:
					raise NavigationFailedError(verdict.reason or 'navigation failed', url=target_url, status=verdict.status)

				if verdict.kind is VerdictKind.RELOAD_REQUESTED:
					await ticker.wait()
					logger.info(f'[NavigationWatcher] reload url={target_url}')
					await self.page.reload(ignore_cache=self.profile.reload_ignore_cache)
					reloads += 1
					continue

				logger.debug(f'[NavigationWatcher] loaded url={target_url} reloads={reloads}')
				return NavigationOutcome(
					url=target_url,
					status=NavigationStatus.LOADED,
					reloads=reloads,
					elapsed_time=loop.time() - started,
				)

	@staticmethod
	async def _next_verdict(policy: CompletionPolicy, remaining: float) -> Verdict | None:
		verdict = policy.poll()
		if verdict is not None or remaining <= 0:
			return verdict
		try:
			return await asyncio.wait_for(policy.next_verdict(), remaining)
		except asyncio.TimeoutError:
			return None

	async def navigate(self, url: Any, timeout: float | None = None) -> NavigationOutcome:
		"""Navigate the page to url and wait for the document to load."""
		return await self.wait_for_response(url, navigate_action(self.page, url), timeout=timeout)

	async def ignore_cache_reload(self, timeout: float | None = None) -> NavigationOutcome:
		"""Reload the current page bypassing the cache and wait for it to load."""
		current_url = await self.page.get_current_url()
		logger.info(f'[NavigationWatcher] ignore cache reload current={current_url}')
		return await self.wait_for_response(current_url, reload_action(self.page, ignore_cache=True), timeout=timeout)

	async def click_and_wait(self, selector: str, url: Any, timeout: float | None = None) -> NavigationOutcome:
		"""Click the element matching selector and wait for url to load."""
		return await self.wait_for_response(url, click_action(self.page, selector), timeout=timeout)

	async def wait_for_load(self, *actions: Action, timeout: float | None = None) -> NavigationOutcome:
		"""Wait for the next page load event, whichever document it belongs to."""
		timeout = self.profile.load_timeout if timeout is None else timeout
		loaded = asyncio.Event()

		def on_event(event: NavigationEvent) -> None:
			if event.kind == 'page_loaded':
				loaded.set()

		loop = asyncio.get_running_loop()
		started = loop.time()

		with self.events.subscribe(on_event, session_id=self.session_id):
			await run_actions(actions)
			logger.debug(f'[NavigationWatcher] wait for load timeout={timeout}s')
			if not loaded.is_set():
				try:
					await asyncio.wait_for(loaded.wait(), timeout)
				except asyncio.TimeoutError:
					logger.warning('[NavigationWatcher] load timeout exceeded')
					if self.profile.raise_on_timeout:
						raise NavigationTimeoutError(None, timeout)
					return NavigationOutcome(status=NavigationStatus.TIMED_OUT, elapsed_time=loop.time() - started)

		return NavigationOutcome(status=NavigationStatus.LOADED, elapsed_time=loop.time() - started)
