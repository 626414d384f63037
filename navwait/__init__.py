"""Reliable navigation waits for Chrome DevTools Protocol sessions."""

from navwait.actor import Browser, Target
from navwait.browser import EventHub, WaitProfile
from navwait.browser.session import BrowserSession
from navwait.config import CONFIG
from navwait.exceptions import CanceledByUserError, NavigationFailedError, NavigationTimeoutError, NavWaitError
from navwait.logging_config import setup_logging
from navwait.navigation import NavigationOutcome, NavigationStatus, NavigationWatcher
from navwait.utils import Stringer, to_string, url
from navwait.waits import wait_for_confirmation, wait_until

__all__ = [
	'CONFIG',
	'Browser',
	'BrowserSession',
	'CanceledByUserError',
	'EventHub',
	'NavWaitError',
	'NavigationFailedError',
	'NavigationOutcome',
	'NavigationStatus',
	'NavigationTimeoutError',
	'NavigationWatcher',
	'Stringer',
	'Target',
	'WaitProfile',
	'setup_logging',
	'to_string',
	'url',
	'wait_for_confirmation',
	'wait_until',
]
