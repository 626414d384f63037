"""Tests for environment configuration, wait profiles and logging setup."""

import io
import logging

import pytest
from pydantic import ValidationError

import navwait.browser.profile
from navwait.browser.profile import WaitProfile
from navwait.config import NavWaitConfig
from navwait.logging_config import setup_logging


def test_defaults_without_environment():
	config = NavWaitConfig.from_env({})

	assert config.NAVWAIT_RESPONSE_TIMEOUT == 30.0
	assert config.NAVWAIT_HEADLESS is True
	assert config.strict_statuses == frozenset({400, 410})


def test_environment_overrides():
	config = NavWaitConfig.from_env(
		{
			'NAVWAIT_RESPONSE_TIMEOUT': '5',
			'NAVWAIT_RELOAD_INTERVAL': '0.5',
			'NAVWAIT_STRICT_STATUSES': '400, 404,410',
			'NAVWAIT_HEADLESS': 'false',
			'NAVWAIT_CDP_URL': '',
			'UNRELATED': 'x',
		}
	)

	assert config.NAVWAIT_RESPONSE_TIMEOUT == 5.0
	assert config.NAVWAIT_RELOAD_INTERVAL == 0.5
	assert config.strict_statuses == frozenset({400, 404, 410})
	assert config.NAVWAIT_HEADLESS is False
	assert config.NAVWAIT_CDP_URL is None


def test_invalid_strict_statuses_rejected():
	with pytest.raises(ValidationError):
		NavWaitConfig.from_env({'NAVWAIT_STRICT_STATUSES': '400,gone'})


def test_wait_profile_defaults_come_from_config(monkeypatch):
	monkeypatch.setattr(
		navwait.browser.profile,
		'CONFIG',
		NavWaitConfig.from_env({'NAVWAIT_LOAD_TIMEOUT': '12', 'NAVWAIT_STRICT_STATUSES': '404'}),
	)

	profile = WaitProfile()

	assert profile.load_timeout == 12.0
	assert profile.strict_statuses == frozenset({404})
	assert profile.raise_on_timeout is False


def test_wait_profile_validation():
	with pytest.raises(ValidationError):
		WaitProfile(reload_interval=0)
	with pytest.raises(ValidationError):
		WaitProfile(unknown_option=True)


def test_setup_logging_replaces_its_handler():
	stream = io.StringIO()

	setup_logging('debug', stream=io.StringIO())
	logger = setup_logging('debug', stream=stream)
	logging.getLogger('navwait.navigation.service').debug('[NavigationWatcher] hello')

	assert len([h for h in logger.handlers if h.get_name() == 'navwait']) == 1
	assert logger.level == logging.DEBUG
	assert stream.getvalue() == 'DEBUG    [navwait.navigation.service] [NavigationWatcher] hello\n'
