"""Target class for the page-level commands navigation waits rely on."""

import asyncio
import base64
import json
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any

from navwait.exceptions import NavWaitError

if TYPE_CHECKING:
	from cdp_use.cdp.dom.commands import GetBoxModelParameters, QuerySelectorParameters
	from cdp_use.cdp.emulation.commands import SetDeviceMetricsOverrideParameters
	from cdp_use.cdp.input.commands import DispatchMouseEventParameters
	from cdp_use.cdp.network.commands import SetCookieParameters
	from cdp_use.cdp.page.commands import CaptureScreenshotParameters, NavigateParameters, ReloadParameters
	from cdp_use.cdp.runtime.commands import EvaluateParameters
	from cdp_use.cdp.target.commands import AttachToTargetParameters
	from cdp_use.client import CDPClient

logger = logging.getLogger(__name__)


class Target:
	"""Page operations on one tab.

	Commands return once the browser acknowledges them; whether a navigation
	actually completed is for NavigationWatcher to decide.
	"""

	def __init__(self, client: 'CDPClient', target_id: str, session_id: str | None = None):
		self._client = client
		self._target_id = target_id
		self._session_id = session_id

	@property
	def target_id(self) -> str:
		return self._target_id

	@property
	def session_id(self) -> str | None:
		return self._session_id

	async def _ensure_session(self) -> str:
		"""Ensure we have a session ID for this target."""
		if not self._session_id:
			params: 'AttachToTargetParameters' = {'targetId': self._target_id, 'flatten': True}
			result = await self._client.send.Target.attachToTarget(params)
			self._session_id = result['sessionId']

			await asyncio.gather(
				self._client.send.Page.enable(session_id=self._session_id),
				self._client.send.DOM.enable(session_id=self._session_id),
				self._client.send.Runtime.enable(session_id=self._session_id),
				self._client.send.Network.enable(session_id=self._session_id),
			)

		return self._session_id

	async def enable_lifecycle_events(self) -> None:
		"""Enable Page lifecycle events (DOMContentLoaded, load, ...)."""
		session_id = await self._ensure_session()
		await self._client.send.Page.enable(session_id=session_id)
		await self._client.send.Page.setLifecycleEventsEnabled(params={'enabled': True}, session_id=session_id)

	async def navigate(self, url: str) -> None:
		session_id = await self._ensure_session()
		params: 'NavigateParameters' = {'url': url}
		result = await self._client.send.Page.navigate(params, session_id=session_id)
		# Network errors also surface as Network.loadingFailed, which the watcher handles
		if result.get('errorText'):
			logger.debug(f'[Target] navigate url={url} error={result["errorText"]}')

	async def reload(self, ignore_cache: bool = False) -> None:
		session_id = await self._ensure_session()
		params: 'ReloadParameters' = {'ignoreCache': ignore_cache}
		await self._client.send.Page.reload(params, session_id=session_id)

	async def get_navigation_history(self) -> tuple[int, list[dict[str, Any]]]:
		"""Return the current index and the history entries."""
		session_id = await self._ensure_session()
		history = await self._client.send.Page.getNavigationHistory(session_id=session_id)
		return history['currentIndex'], list(history['entries'])

	async def get_current_url(self) -> str:
		current_index, entries = await self.get_navigation_history()
		if not entries:
			raise NavWaitError('navigation history is empty')
		return entries[current_index]['url']

	async def evaluate(self, expression: str) -> Any:
		"""Evaluate a JavaScript expression and return its value."""
		session_id = await self._ensure_session()
		params: 'EvaluateParameters' = {'expression': expression, 'returnByValue': True, 'awaitPromise': True}
		result = await self._client.send.Runtime.evaluate(params, session_id=session_id)

		if 'exceptionDetails' in result:
			raise NavWaitError(f'JavaScript evaluation failed: {result["exceptionDetails"]}')

		return result.get('result', {}).get('value')

	async def get_text(self, selector: str) -> str | None:
		"""Text content of the first element matching selector, None if absent."""
		return await self.evaluate(f'document.querySelector({json.dumps(selector)})?.textContent ?? null')

	async def click(self, selector: str) -> None:
		"""Left-click the center of the first element matching selector."""
		session_id = await self._ensure_session()

		doc_result = await self._client.send.DOM.getDocument(session_id=session_id)
		query_params: 'QuerySelectorParameters' = {'nodeId': doc_result['root']['nodeId'], 'selector': selector}
		query_result = await self._client.send.DOM.querySelector(query_params, session_id=session_id)
		node_id = query_result.get('nodeId')
		if not node_id:
			raise NavWaitError(f'no element matches selector {selector!r}')

		await self._client.send.DOM.scrollIntoViewIfNeeded(params={'nodeId': node_id}, session_id=session_id)
		box_params: 'GetBoxModelParameters' = {'nodeId': node_id}
		box = await self._client.send.DOM.getBoxModel(box_params, session_id=session_id)
		quad = box['model']['content']
		x = sum(quad[0::2]) / 4
		y = sum(quad[1::2]) / 4

		for event_type in ('mousePressed', 'mouseReleased'):
			mouse_params: 'DispatchMouseEventParameters' = {
				'type': event_type,
				'x': x,
				'y': y,
				'button': 'left',
				'clickCount': 1,
			}
			await self._client.send.Input.dispatchMouseEvent(mouse_params, session_id=session_id)

	async def screenshot(self, path: str | Path) -> Path:
		"""Capture the entire page as PNG and write it to path.

		This overrides the viewport emulation settings so the whole content fits.
		"""
		session_id = await self._ensure_session()

		metrics = await self._client.send.Page.getLayoutMetrics(session_id=session_id)
		content = metrics.get('cssContentSize') or metrics['contentSize']
		width, height = math.ceil(content['width']), math.ceil(content['height'])

		override: 'SetDeviceMetricsOverrideParameters' = {
			'width': width,
			'height': height,
			'deviceScaleFactor': 1,
			'mobile': False,
			'screenOrientation': {'type': 'portraitPrimary', 'angle': 0},
		}
		await self._client.send.Emulation.setDeviceMetricsOverride(override, session_id=session_id)

		params: 'CaptureScreenshotParameters' = {
			'format': 'png',
			'clip': {
				'x': content['x'],
				'y': content['y'],
				'width': content['width'],
				'height': content['height'],
				'scale': 1,
			},
		}
		result = await self._client.send.Page.captureScreenshot(params, session_id=session_id)

		output = Path(path)
		output.write_bytes(base64.b64decode(result['data']))
		logger.debug(f'[Target] screenshot {width}x{height} saved to {output}')
		return output

	async def get_all_cookies(self) -> list[dict[str, Any]]:
		session_id = await self._ensure_session()
		result = await self._client.send.Network.getAllCookies(session_id=session_id)
		return list(result['cookies'])

	async def set_cookie(self, cookie: 'SetCookieParameters') -> bool:
		session_id = await self._ensure_session()
		result = await self._client.send.Network.setCookie(cookie, session_id=session_id)
		return bool(result.get('success', True))
