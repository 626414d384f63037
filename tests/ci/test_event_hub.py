"""Tests for protocol event parsing and the event hub."""

from types import SimpleNamespace

import pytest

from navwait.browser.event_hub import EventHub
from navwait.browser.events import (
	CDP_EVENT_METHODS,
	LifecycleMilestoneEvent,
	LoadingFailedEvent,
	PageLoadedEvent,
	RequestSentEvent,
	ResponseReceivedEvent,
	parse_cdp_event,
)


class TestParseCdpEvent:
	def test_request_will_be_sent(self):
		event = parse_cdp_event(
			'Network.requestWillBeSent',
			{
				'requestId': '1000.1',
				'loaderId': 'L1',
				'frameId': 'F1',
				'type': 'Document',
				'request': {'url': 'https://example.com/', 'method': 'GET'},
			},
			session_id='S1',
		)

		assert event == RequestSentEvent(
			session_id='S1',
			request_id='1000.1',
			url='https://example.com/',
			method='GET',
			resource_type='Document',
			loader_id='L1',
			frame_id='F1',
		)

	def test_response_received(self):
		event = parse_cdp_event(
			'Network.responseReceived',
			{
				'requestId': '1000.1',
				'loaderId': 'L1',
				'frameId': 'F1',
				'type': 'Document',
				'response': {'url': 'https://example.com/', 'status': 503, 'headers': {}},
			},
		)

		assert isinstance(event, ResponseReceivedEvent)
		assert event.status == 503
		assert event.loader_id == 'L1'

	def test_loading_failed(self):
		event = parse_cdp_event(
			'Network.loadingFailed',
			{'requestId': '1000.1', 'errorText': 'net::ERR_ABORTED', 'type': 'Document', 'canceled': True},
		)

		assert event == LoadingFailedEvent(request_id='1000.1', error_text='net::ERR_ABORTED', resource_type='Document', canceled=True)

	def test_page_events(self):
		assert parse_cdp_event('Page.loadEventFired', {'timestamp': 12.5}, 'S1') == PageLoadedEvent(session_id='S1')
		assert parse_cdp_event(
			'Page.lifecycleEvent', {'frameId': 'F1', 'loaderId': 'L1', 'name': 'DOMContentLoaded', 'timestamp': 1.0}
		) == LifecycleMilestoneEvent(name='DOMContentLoaded', loader_id='L1', frame_id='F1')

	def test_unknown_method_returns_none(self):
		assert parse_cdp_event('Network.dataReceived', {'requestId': '1'}) is None


class TestEventHub:
	def test_dispatch_preserves_order(self, event_hub):
		seen = []
		event_hub.subscribe(lambda e: seen.append(e.kind))

		event_hub.dispatch(RequestSentEvent(request_id='1', url='https://example.com/'))
		event_hub.dispatch(PageLoadedEvent())

		assert seen == ['request_sent', 'page_loaded']

	def test_closed_subscription_stops_delivery(self, event_hub):
		seen = []
		with event_hub.subscribe(seen.append) as subscription:
			event_hub.dispatch(PageLoadedEvent())

		event_hub.dispatch(PageLoadedEvent())

		assert len(seen) == 1
		assert not subscription.active
		assert event_hub.subscriber_count == 0
		subscription.close()

	def test_session_filter(self, event_hub):
		seen = []
		event_hub.subscribe(seen.append, session_id='S1')

		event_hub.dispatch(PageLoadedEvent(session_id='S2'))
		event_hub.dispatch(PageLoadedEvent(session_id='S1'))

		assert seen == [PageLoadedEvent(session_id='S1')]

	def test_subscriber_closed_during_dispatch_is_skipped(self, event_hub):
		seen = []
		second = None

		def first(event):
			second.close()

		event_hub.subscribe(first)
		second = event_hub.subscribe(seen.append)

		event_hub.dispatch(PageLoadedEvent())

		assert seen == []

	def test_failing_subscriber_does_not_block_others(self, event_hub):
		seen = []

		def broken(event):
			raise ValueError('boom')

		event_hub.subscribe(broken)
		event_hub.subscribe(seen.append)

		event_hub.dispatch(PageLoadedEvent())

		assert len(seen) == 1


class _FakeRegister:
	def __init__(self):
		self.handlers = {}

	def domain(self, name):
		def make(method):
			return lambda handler: self.handlers.__setitem__(f'{name}.{method}', handler)

		return SimpleNamespace(
			requestWillBeSent=make('requestWillBeSent'),
			loadingFailed=make('loadingFailed'),
			responseReceived=make('responseReceived'),
			loadEventFired=make('loadEventFired'),
			lifecycleEvent=make('lifecycleEvent'),
		)


@pytest.fixture
def fake_cdp_client():
	register = _FakeRegister()
	client = SimpleNamespace(register=SimpleNamespace(Network=register.domain('Network'), Page=register.domain('Page')))
	client.handlers = register.handlers
	return client


async def test_attach_registers_handlers_and_forwards_events(event_hub, fake_cdp_client):
	seen = []
	event_hub.subscribe(seen.append)

	event_hub.attach(fake_cdp_client)

	assert set(fake_cdp_client.handlers) == set(CDP_EVENT_METHODS)
	await fake_cdp_client.handlers['Page.lifecycleEvent']({'frameId': 'F1', 'loaderId': 'L1', 'name': 'load'}, 'S1')
	assert seen == [LifecycleMilestoneEvent(session_id='S1', name='load', loader_id='L1', frame_id='F1')]


def test_attach_is_idempotent_per_client(event_hub, fake_cdp_client):
	event_hub.attach(fake_cdp_client)
	first_handler = fake_cdp_client.handlers['Page.loadEventFired']

	event_hub.attach(fake_cdp_client)

	assert fake_cdp_client.handlers['Page.loadEventFired'] is first_handler
