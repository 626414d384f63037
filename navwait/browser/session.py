"""Browser session wiring a CDP connection to navigation waits."""

import logging
from typing import Any

from cdp_use.client import CDPClient

from navwait.actor.browser import Browser
from navwait.actor.target import Target
from navwait.browser.event_hub import EventHub
from navwait.browser.launcher import LocalChrome, resolve_cdp_url
from navwait.browser.profile import WaitProfile
from navwait.config import CONFIG
from navwait.navigation.service import NavigationWatcher

logger = logging.getLogger(__name__)


class BrowserSession:
	"""One CDP connection with one tab whose navigations can be awaited.

	Connects to cdp_url (or NAVWAIT_CDP_URL) when given, otherwise launches a
	local Chrome for the lifetime of the session.
	"""

	def __init__(self, cdp_url: str | None = None, profile: WaitProfile | None = None, chrome: LocalChrome | None = None):
		self.cdp_url = cdp_url or CONFIG.NAVWAIT_CDP_URL
		self.profile = profile or WaitProfile()
		self.events = EventHub()
		self._chrome = chrome
		self._client: CDPClient | None = None
		self._target: Target | None = None
		self._navigation: NavigationWatcher | None = None

	@property
	def target(self) -> Target:
		if self._target is None:
			raise RuntimeError('BrowserSession is not started')
		return self._target

	@property
	def navigation(self) -> NavigationWatcher:
		if self._navigation is None:
			raise RuntimeError('BrowserSession is not started')
		return self._navigation

	async def start(self) -> 'BrowserSession':
		"""Connect and open a tab; whatever was already started is stopped again on failure."""
		try:
			if self.cdp_url:
				ws_url = await resolve_cdp_url(self.cdp_url)
			else:
				self._chrome = self._chrome or LocalChrome()
				ws_url = await self._chrome.start()

			logger.debug(f'[BrowserSession] connecting to {ws_url}')
			client = CDPClient(ws_url)
			await client.start()
			self._client = client

			# Listen before the tab exists so its first events are not lost
			self.events.attach(client)

			self._target = await Browser(client).new_target()
			await self._target.enable_lifecycle_events()
			self._navigation = NavigationWatcher(self._target, self.events, self.profile, session_id=self._target.session_id)
		except BaseException:
			await self.stop()
			raise
		return self

	async def stop(self) -> None:
		if self._client is not None:
			if self._target is not None:
				try:
					await Browser(self._client).close_target(self._target)
				except Exception as e:
					logger.debug(f'[BrowserSession] failed to close tab: {type(e).__name__}: {e}')
			await self._client.stop()
		self._client = None
		self._target = None
		self._navigation = None

		if self._chrome is not None:
			await self._chrome.stop()

	async def __aenter__(self) -> 'BrowserSession':
		return await self.start()

	async def __aexit__(self, *exc_info: Any) -> None:
		await self.stop()
