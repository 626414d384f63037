"""Classifies protocol events against the navigation being awaited."""

import logging
from http import HTTPStatus
from urllib.parse import urldefrag

from navwait.browser.events import (
	LifecycleMilestoneEvent,
	LoadingFailedEvent,
	NavigationEvent,
	PageLoadedEvent,
	RequestSentEvent,
	ResponseReceivedEvent,
)
from navwait.navigation.views import PENDING, Classification, CorrelationKeys, EventClass

logger = logging.getLogger(__name__)

DEFAULT_STRICT_STATUSES = frozenset({HTTPStatus.BAD_REQUEST, HTTPStatus.GONE})


def _status_text(status: int) -> str:
	try:
		return f'{status} {HTTPStatus(status).phrase}'
	except ValueError:
		return str(status)


class EventCorrelator:
	"""Ties protocol events back to the request and document behind one URL prefix.

	URLs are matched by prefix so redirects and query suffixes still count.
	Fragments never reach the network layer, so they are dropped from the prefix.
	Within a reload cycle the first matching request owns the keys; later
	requests sharing the prefix (subresources, favicons) are ignored.
	Keys are only written from classify(), which runs in the listener callback.
	"""

	def __init__(
		self,
		url_prefix: str,
		strict_statuses: frozenset[int] = DEFAULT_STRICT_STATUSES,
		main_document_only: bool = False,
	):
		self.url_prefix = urldefrag(url_prefix).url
		self.strict_statuses = strict_statuses
		self.main_document_only = main_document_only
		self.keys = CorrelationKeys()
		self._classifiers = {
			'request_sent': self._on_request_sent,
			'loading_failed': self._on_loading_failed,
			'response_received': self._on_response_received,
			'page_loaded': self._on_page_loaded,
			'lifecycle': self._on_lifecycle,
		}

	def classify(self, event: NavigationEvent) -> Classification:
		return self._classifiers[event.kind](event)

	def rearm(self) -> None:
		"""Forget the abandoned request so the reloaded one can be captured."""
		self.keys = CorrelationKeys()

	def _matches(self, url: str, resource_type: str | None) -> bool:
		if not url.startswith(self.url_prefix):
			return False
		if self.main_document_only and resource_type not in (None, 'Document'):
			return False
		return True

	def _on_request_sent(self, event: RequestSentEvent) -> Classification:
		if self._matches(event.url, event.resource_type) and not self.keys.has_request:
			self.keys.request_id = event.request_id
			logger.debug(f'[EventCorrelator] request id={event.request_id} method={event.method} url={event.url}')
		return PENDING

	def _on_response_received(self, event: ResponseReceivedEvent) -> Classification:
		if not self._matches(event.url, event.resource_type):
			return PENDING
		if self.keys.has_request and event.request_id != self.keys.request_id:
			return PENDING
		if not self.keys.has_request:
			self.keys.request_id = event.request_id

		logger.debug(f'[EventCorrelator] response status={event.status} url={event.url}')
		if 200 <= event.status < 400:
			if not self.keys.has_document:
				self.keys.loader_id = event.loader_id
				self.keys.frame_id = event.frame_id
			return PENDING

		if event.status in self.strict_statuses:
			return Classification(
				kind=EventClass.FATAL,
				reason=f'status={_status_text(event.status)} url={self.url_prefix}',
				status=event.status,
			)
		return Classification(kind=EventClass.RETRYABLE, status=event.status)

	def _on_loading_failed(self, event: LoadingFailedEvent) -> Classification:
		ours = self.keys.has_request and event.request_id == self.keys.request_id
		if not ours and not (self.main_document_only and event.resource_type == 'Document'):
			return PENDING
		logger.debug(f'[EventCorrelator] error={event.error_text} url={self.url_prefix}')
		return Classification(kind=EventClass.RETRYABLE, reason=event.error_text)

	def _on_page_loaded(self, event: PageLoadedEvent) -> Classification:
		if not self.keys.has_request:
			return PENDING
		if self._is_other_document(event.loader_id, event.frame_id):
			return PENDING
		return Classification(kind=EventClass.COMPLETED, reason='load')

	def _on_lifecycle(self, event: LifecycleMilestoneEvent) -> Classification:
		if event.name != 'DOMContentLoaded' or not self.keys.has_document:
			return PENDING
		if event.loader_id != self.keys.loader_id or event.frame_id != self.keys.frame_id:
			return PENDING
		return Classification(kind=EventClass.COMPLETED, reason=event.name)

	def _is_other_document(self, loader_id: str | None, frame_id: str | None) -> bool:
		if not self.keys.has_document:
			return False
		if loader_id is not None and loader_id != self.keys.loader_id:
			return True
		return frame_id is not None and frame_id != self.keys.frame_id
