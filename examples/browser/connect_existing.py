"""
Attach to an already running Chrome and follow a link.

Start Chrome with remote debugging first:
	google-chrome --remote-debugging-port=9222

then run:
	NAVWAIT_CDP_URL=http://127.0.0.1:9222 python examples/browser/connect_existing.py
"""

import asyncio

from dotenv import load_dotenv

load_dotenv()

from navwait import BrowserSession, url


async def main():
	site = 'https://www.iana.org'

	async with BrowserSession() as session:
		await session.navigation.navigate(url(site, '/domains'))
		outcome = await session.navigation.click_and_wait('a[href="/domains/reserved"]', url(site, '/domains/reserved'))
		print(outcome)

		outcome = await session.navigation.ignore_cache_reload()
		print(outcome)


if __name__ == '__main__':
	asyncio.run(main())
