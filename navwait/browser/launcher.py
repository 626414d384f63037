"""Locate or launch a Chrome instance and resolve its CDP websocket URL."""

import asyncio
import contextlib
import logging
import re
import shutil
import tempfile
from pathlib import Path

import httpx

from navwait.config import CONFIG
from navwait.exceptions import NavWaitError

logger = logging.getLogger(__name__)

CHROME_EXECUTABLES = ('google-chrome', 'google-chrome-stable', 'chromium', 'chromium-browser', 'chrome')
CHROME_APP_PATHS = (
	'/Applications/Google Chrome.app/Contents/MacOS/Google Chrome',
	'/Applications/Chromium.app/Contents/MacOS/Chromium',
)
DEVTOOLS_LISTENING = re.compile(rb'DevTools listening on (ws://\S+)')


def find_chrome_executable() -> str | None:
	"""NAVWAIT_CHROME_PATH if set, else the first Chrome/Chromium found on this machine."""
	if CONFIG.NAVWAIT_CHROME_PATH:
		return CONFIG.NAVWAIT_CHROME_PATH
	for name in CHROME_EXECUTABLES:
		found = shutil.which(name)
		if found:
			return found
	for path in CHROME_APP_PATHS:
		if Path(path).exists():
			return path
	return None


async def resolve_cdp_url(cdp_url: str, timeout: float = 10.0) -> str:
	"""Return a websocket URL for cdp_url.

	ws:// URLs are returned as is; http(s) endpoints are asked for their
	browser websocket through /json/version.
	"""
	if cdp_url.startswith(('ws://', 'wss://')):
		return cdp_url

	async with httpx.AsyncClient(timeout=timeout) as client:
		response = await client.get(f'{cdp_url.rstrip("/")}/json/version')
		response.raise_for_status()
		ws_url = response.json().get('webSocketDebuggerUrl')

	if not ws_url:
		raise NavWaitError(f'no webSocketDebuggerUrl advertised at {cdp_url}')
	return ws_url


class LocalChrome:
	"""A Chrome process with a throwaway profile and remote debugging enabled."""

	def __init__(
		self,
		executable: str | None = None,
		headless: bool | None = None,
		extra_args: tuple[str, ...] = (),
		startup_timeout: float = 30.0,
	):
		self.executable = executable or find_chrome_executable()
		self.headless = CONFIG.NAVWAIT_HEADLESS if headless is None else headless
		self.extra_args = extra_args
		self.startup_timeout = startup_timeout
		self._process: asyncio.subprocess.Process | None = None
		self._user_data_dir: str | None = None
		self._stderr_drain: asyncio.Task[None] | None = None

	async def start(self) -> str:
		"""Launch Chrome and return its browser websocket URL."""
		if not self.executable:
			raise NavWaitError('no Chrome executable found, set NAVWAIT_CHROME_PATH')

		self._user_data_dir = tempfile.mkdtemp(prefix='navwait-chrome-')
		args = [
			'--remote-debugging-port=0',
			f'--user-data-dir={self._user_data_dir}',
			'--no-first-run',
			'--no-default-browser-check',
			'--disable-gpu',
			'--no-sandbox',
		]
		if self.headless:
			args.append('--headless=new')
		args.extend(self.extra_args)
		args.append('about:blank')

		logger.debug(f'[LocalChrome] launching {self.executable} headless={self.headless}')
		self._process = await asyncio.create_subprocess_exec(
			self.executable,
			*args,
			stdout=asyncio.subprocess.DEVNULL,
			stderr=asyncio.subprocess.PIPE,
		)

		try:
			ws_url = await asyncio.wait_for(self._read_ws_url(), self.startup_timeout)
		except BaseException:
			await self.stop()
			raise

		# Keep reading stderr so Chrome never blocks on a full pipe
		self._stderr_drain = asyncio.create_task(self._drain_stderr(self._process.stderr))
		logger.debug(f'[LocalChrome] listening on {ws_url}')
		return ws_url

	async def _read_ws_url(self) -> str:
		assert self._process is not None and self._process.stderr is not None
		while True:
			line = await self._process.stderr.readline()
			if not line:
				raise NavWaitError(f'Chrome exited before opening DevTools (code={self._process.returncode})')
			match = DEVTOOLS_LISTENING.search(line)
			if match:
				return match.group(1).decode()

	async def _drain_stderr(self, stream: asyncio.StreamReader) -> None:
		while await stream.readline():
			pass

	async def stop(self) -> None:
		if self._process is not None and self._process.returncode is None:
			self._process.terminate()
			try:
				await asyncio.wait_for(self._process.wait(), 5.0)
			except asyncio.TimeoutError:
				self._process.kill()
				await self._process.wait()
		self._process = None

		if self._stderr_drain is not None:
			self._stderr_drain.cancel()
			with contextlib.suppress(asyncio.CancelledError):
				await self._stderr_drain
			self._stderr_drain = None

		if self._user_data_dir is not None:
			shutil.rmtree(self._user_data_dir, ignore_errors=True)
			self._user_data_dir = None
