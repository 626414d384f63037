from navwait.navigation.actions import Action, click_action, navigate_action, reload_action, run_actions
from navwait.navigation.correlator import EventCorrelator
from navwait.navigation.policy import CompletionPolicy
from navwait.navigation.service import NavigationWatcher
from navwait.navigation.views import (
	Classification,
	CorrelationKeys,
	EventClass,
	NavigationOutcome,
	NavigationStatus,
	PageCommands,
	Verdict,
	VerdictKind,
)

__all__ = [
	'Action',
	'Classification',
	'CompletionPolicy',
	'CorrelationKeys',
	'EventClass',
	'EventCorrelator',
	'NavigationOutcome',
	'NavigationStatus',
	'NavigationWatcher',
	'PageCommands',
	'Verdict',
	'VerdictKind',
	'click_action',
	'navigate_action',
	'reload_action',
	'run_actions',
]
