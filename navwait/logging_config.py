import logging
import sys
from typing import TextIO

from navwait.config import CONFIG

_HANDLER_NAME = 'navwait'


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> logging.Logger:
	"""Install a single stream handler on the ``navwait`` logger.

	Calling it again replaces the handler instead of stacking another one.
	"""
	log_level = (level or CONFIG.NAVWAIT_LOGGING_LEVEL).upper()

	logger = logging.getLogger('navwait')
	for handler in list(logger.handlers):
		if handler.get_name() == _HANDLER_NAME:
			logger.removeHandler(handler)

	handler = logging.StreamHandler(stream or sys.stderr)
	handler.set_name(_HANDLER_NAME)
	handler.setFormatter(logging.Formatter('%(levelname)-8s [%(name)s] %(message)s'))
	logger.addHandler(handler)
	logger.setLevel(getattr(logging, log_level, logging.INFO))
	return logger
