"""
Log in by hand once, keep the cookies and reuse them on the next run.

The first run opens a visible browser and waits for you to press enter after
logging in; later runs restore the saved cookies before navigating.
"""

import asyncio
from datetime import datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

from navwait import BrowserSession, wait_for_confirmation, wait_until
from navwait.browser.launcher import LocalChrome
from navwait.cookies import restore_cookies, save_cookies

load_dotenv()

COOKIES_FILE = Path('cookies.jsonl')
LOGIN_URL = 'https://github.com/login'


async def main():
	async with BrowserSession(chrome=LocalChrome(headless=False)) as session:
		restored = await restore_cookies(session.target, COOKIES_FILE, lambda c: c.domain.endswith('github.com'))

		await session.navigation.navigate(LOGIN_URL)

		if not restored:
			await wait_for_confirmation(message='Log in, then press enter (or type n to abort): ', accepted=['', 'y'])
			saved = await save_cookies(session.target, COOKIES_FILE)
			print(f'Saved {saved} cookie(s) to {COOKIES_FILE}')

		# Keep the window open a little before closing
		await wait_until(datetime.now() + timedelta(seconds=5))


if __name__ == '__main__':
	asyncio.run(main())
