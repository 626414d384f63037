from navwait.browser.event_hub import EventHub, Subscription
from navwait.browser.events import (
	LifecycleMilestoneEvent,
	LoadingFailedEvent,
	NavigationEvent,
	PageLoadedEvent,
	RequestSentEvent,
	ResponseReceivedEvent,
	parse_cdp_event,
)
from navwait.browser.profile import WaitProfile

__all__ = [
	'EventHub',
	'LifecycleMilestoneEvent',
	'LoadingFailedEvent',
	'NavigationEvent',
	'PageLoadedEvent',
	'RequestSentEvent',
	'ResponseReceivedEvent',
	'Subscription',
	'WaitProfile',
	'parse_cdp_event',
]
