"""Explicit subscribe/unsubscribe over the CDP event stream."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from uuid_extensions import uuid7str

from navwait.browser.events import CDP_EVENT_METHODS, NavigationEvent, parse_cdp_event

if TYPE_CHECKING:
	from cdp_use.client import CDPClient

logger = logging.getLogger(__name__)

EventCallback = Callable[[NavigationEvent], None]


class Subscription:
	"""Handle for one listener; closing it stops delivery immediately.

	Usable as a context manager so a wait releases its listener on every exit path.
	"""

	def __init__(self, hub: 'EventHub', callback: EventCallback, session_id: str | None = None):
		self.id = uuid7str()
		self.session_id = session_id
		self._hub = hub
		self._callback = callback
		self._active = True

	@property
	def active(self) -> bool:
		return self._active

	def deliver(self, event: NavigationEvent) -> None:
		if not self._active:
			return
		if self.session_id is not None and event.session_id != self.session_id:
			return
		self._callback(event)

	def close(self) -> None:
		if self._active:
			self._active = False
			self._hub._remove(self)

	def __enter__(self) -> 'Subscription':
		return self

	def __exit__(self, *exc_info: Any) -> None:
		self.close()


class EventHub:
	"""Fans protocol events out to subscribers in the order they arrive.

	cdp-use keeps one handler per CDP method, so the hub registers itself once
	per client and multiplexes to any number of short-lived subscriptions.
	"""

	def __init__(self):
		self._subscriptions: list[Subscription] = []
		self._attached_client: 'CDPClient | None' = None

	@property
	def subscriber_count(self) -> int:
		return len(self._subscriptions)

	def subscribe(self, callback: EventCallback, session_id: str | None = None) -> Subscription:
		subscription = Subscription(self, callback, session_id=session_id)
		self._subscriptions.append(subscription)
		logger.debug(f'[EventHub] subscribed {subscription.id[-8:]} (total={len(self._subscriptions)})')
		return subscription

	def _remove(self, subscription: Subscription) -> None:
		if subscription in self._subscriptions:
			self._subscriptions.remove(subscription)
			logger.debug(f'[EventHub] unsubscribed {subscription.id[-8:]} (total={len(self._subscriptions)})')

	def dispatch(self, event: NavigationEvent) -> None:
		"""Deliver one event to every active subscription.

		A subscriber closed by an earlier subscriber during the same dispatch does
		not see the event. A raising subscriber is logged and skipped.
		"""
		for subscription in list(self._subscriptions):
			try:
				subscription.deliver(event)
			except Exception as e:
				logger.warning(f'[EventHub] subscriber {subscription.id[-8:]} failed on {event.kind}: {type(e).__name__}: {e}')

	def attach(self, cdp_client: 'CDPClient') -> None:
		"""Register cdp-use handlers that feed this hub (once per client)."""
		if self._attached_client is cdp_client:
			return

		for method in CDP_EVENT_METHODS:
			domain, name = method.split('.')
			register = getattr(getattr(cdp_client.register, domain), name)
			register(self._forwarder(method))

		self._attached_client = cdp_client
		logger.debug('[EventHub] registered CDP Network and Page event handlers')

	def _forwarder(self, method: str):
		async def forward(event: dict[str, Any], session_id: str | None = None) -> None:
			parsed = parse_cdp_event(method, event, session_id)
			if parsed is not None:
				self.dispatch(parsed)

		return forward
