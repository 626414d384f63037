"""Turns classified events into one outcome per wait."""

import asyncio
import logging

from navwait.navigation.views import Classification, EventClass, Verdict, VerdictKind

logger = logging.getLogger(__name__)


class CompletionPolicy:
	"""Sequences classifications into verdicts on a capacity-1 queue.

	A retryable failure only raises the reload-pending slot. The reload verdict
	is emitted once the abandoned document reports completion, so a reload never
	overlaps the load it replaces and that stale completion is not reported as
	success. Failures are terminal as soon as they are seen.
	"""

	def __init__(self):
		self.verdicts: asyncio.Queue[Verdict] = asyncio.Queue(maxsize=1)
		self._reload_pending = False
		self._closed = False

	@property
	def reload_pending(self) -> bool:
		return self._reload_pending

	@property
	def closed(self) -> bool:
		return self._closed

	def submit(self, classification: Classification) -> Verdict:
		verdict = self._decide(classification)
		if verdict.kind is not VerdictKind.PENDING:
			self._deliver(verdict)
		return verdict

	def _decide(self, classification: Classification) -> Verdict:
		if self._closed:
			return Verdict.pending()

		if classification.kind is EventClass.FATAL:
			self._closed = True
			return Verdict.failure(classification.reason or 'navigation failed', status=classification.status)

		if classification.kind is EventClass.RETRYABLE:
			if not self._reload_pending:
				logger.debug(f'[CompletionPolicy] reload pending (status={classification.status} reason={classification.reason})')
			self._reload_pending = True
			return Verdict.pending()

		if classification.kind is EventClass.COMPLETED:
			if self._reload_pending:
				self._reload_pending = False
				return Verdict.reload()
			self._closed = True
			return Verdict.success()

		return Verdict.pending()

	def _deliver(self, verdict: Verdict) -> None:
		try:
			self.verdicts.put_nowait(verdict)
			return
		except asyncio.QueueFull:
			pass

		# Only an unconsumed reload can be queued here; terminal verdicts close the policy.
		if verdict.is_terminal:
			self.verdicts.get_nowait()
			self.verdicts.put_nowait(verdict)

	def poll(self) -> Verdict | None:
		try:
			return self.verdicts.get_nowait()
		except asyncio.QueueEmpty:
			return None

	async def next_verdict(self) -> Verdict:
		return await self.verdicts.get()
