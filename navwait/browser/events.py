"""Typed protocol events consumed by navigation waits.

Only the handful of CDP events needed to follow a document load are modelled.
Each model carries a ``kind`` tag so the set stays closed and consumers can
dispatch on it without isinstance chains.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ProtocolEvent(BaseModel):
	"""Fields shared by every protocol event."""

	model_config = ConfigDict(extra='forbid', frozen=True)

	session_id: str | None = Field(default=None, description='CDP session the event was received on')


class RequestSentEvent(ProtocolEvent):
	"""Network.requestWillBeSent"""

	kind: Literal['request_sent'] = 'request_sent'
	request_id: str
	url: str
	method: str = 'GET'
	resource_type: str | None = None
	loader_id: str | None = None
	frame_id: str | None = None


class LoadingFailedEvent(ProtocolEvent):
	"""Network.loadingFailed"""

	kind: Literal['loading_failed'] = 'loading_failed'
	request_id: str
	error_text: str = ''
	resource_type: str | None = None
	canceled: bool = False


class ResponseReceivedEvent(ProtocolEvent):
	"""Network.responseReceived"""

	kind: Literal['response_received'] = 'response_received'
	request_id: str
	url: str
	status: int
	loader_id: str | None = None
	frame_id: str | None = None
	resource_type: str | None = None


class PageLoadedEvent(ProtocolEvent):
	"""Page.loadEventFired

	CDP does not attach loader/frame ids to this event; they are optional so
	sources that know them can pass them along.
	"""

	kind: Literal['page_loaded'] = 'page_loaded'
	loader_id: str | None = None
	frame_id: str | None = None


class LifecycleMilestoneEvent(ProtocolEvent):
	"""Page.lifecycleEvent"""

	kind: Literal['lifecycle'] = 'lifecycle'
	name: str
	loader_id: str
	frame_id: str


NavigationEvent = Annotated[
	RequestSentEvent | LoadingFailedEvent | ResponseReceivedEvent | PageLoadedEvent | LifecycleMilestoneEvent,
	Field(discriminator='kind'),
]

# CDP methods the hub listens to, in registration order
CDP_EVENT_METHODS: tuple[str, ...] = (
	'Network.requestWillBeSent',
	'Network.loadingFailed',
	'Network.responseReceived',
	'Page.loadEventFired',
	'Page.lifecycleEvent',
)


def parse_cdp_event(method: str, params: dict[str, Any], session_id: str | None = None) -> NavigationEvent | None:
	"""Convert a raw cdp-use event payload into a typed event.

	Returns None for methods outside CDP_EVENT_METHODS.
	"""
	if method == 'Network.requestWillBeSent':
		request = params.get('request', {})
		return RequestSentEvent(
			session_id=session_id,
			request_id=params.get('requestId', ''),
			url=request.get('url', ''),
			method=request.get('method', 'GET'),
			resource_type=params.get('type'),
			loader_id=params.get('loaderId'),
			frame_id=params.get('frameId'),
		)

	if method == 'Network.loadingFailed':
		return LoadingFailedEvent(
			session_id=session_id,
			request_id=params.get('requestId', ''),
			error_text=params.get('errorText', ''),
			resource_type=params.get('type'),
			canceled=bool(params.get('canceled', False)),
		)

	if method == 'Network.responseReceived':
		response = params.get('response', {})
		return ResponseReceivedEvent(
			session_id=session_id,
			request_id=params.get('requestId', ''),
			url=response.get('url', ''),
			status=int(response.get('status', 0)),
			loader_id=params.get('loaderId'),
			frame_id=params.get('frameId'),
			resource_type=params.get('type'),
		)

	if method == 'Page.loadEventFired':
		return PageLoadedEvent(session_id=session_id)

	if method == 'Page.lifecycleEvent':
		return LifecycleMilestoneEvent(
			session_id=session_id,
			name=params.get('name', ''),
			loader_id=params.get('loaderId', ''),
			frame_id=params.get('frameId', ''),
		)

	return None
