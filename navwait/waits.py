"""Waits that do not depend on protocol events."""

import asyncio
import logging
import sys
from collections.abc import Iterable
from datetime import datetime
from typing import TextIO

from navwait.exceptions import CanceledByUserError

logger = logging.getLogger(__name__)


async def wait_until(when: datetime) -> None:
	"""Sleep until the given instant; instants in the past return immediately.

	Naive datetimes are compared against local time.
	"""
	logger.debug(f'[wait_until] {when.isoformat()}')
	delay = (when - datetime.now(when.tzinfo)).total_seconds()
	if delay > 0:
		await asyncio.sleep(delay)


async def wait_for_confirmation(
	stream: TextIO | None = None,
	message: str = '',
	accepted: Iterable[str] = (),
	output: TextIO | None = None,
) -> None:
	"""Print message and wait for one line of input.

	The answer is stripped and compared case-sensitively with accepted. With
	nothing in accepted any answer, including an empty one, confirms.

	Raises:
		CanceledByUserError: the answer is not one of accepted
	"""
	stream = stream or sys.stdin
	output = output or sys.stdout
	accepted = tuple(accepted)

	if message:
		output.write(message)
		output.flush()

	line = await asyncio.to_thread(stream.readline)
	answer = line.strip()

	if not accepted or answer in accepted:
		logger.info('[wait_for_confirmation] confirmed')
		return

	logger.info('[wait_for_confirmation] canceled')
	raise CanceledByUserError()
