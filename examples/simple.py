"""
Navigate and wait until the document really loaded, reloading through transient errors.

Setup:
1. Install Chrome or Chromium, or point NAVWAIT_CHROME_PATH at it
2. Optional: export NAVWAIT_HEADLESS=false to watch the browser
"""

import asyncio

from dotenv import load_dotenv

from navwait import BrowserSession, NavigationFailedError, WaitProfile, setup_logging

load_dotenv()


async def main():
	setup_logging('debug')

	async with BrowserSession(profile=WaitProfile(response_timeout=20)) as session:
		try:
			outcome = await session.navigation.navigate('https://example.com/')
		except NavigationFailedError as e:
			print(f'Navigation failed with status {e.status}: {e}')
			return

		print(f'{outcome.status.value} after {outcome.reloads} reload(s) in {outcome.elapsed_time:.2f}s')
		print(await session.target.get_text('h1'))


if __name__ == '__main__':
	asyncio.run(main())
