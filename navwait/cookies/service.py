"""Save and restore browser cookies as JSON lines."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from navwait.cookies.views import Cookie
from navwait.exceptions import NavWaitError
from navwait.utils import to_string

if TYPE_CHECKING:
	from navwait.actor.target import Target

logger = logging.getLogger(__name__)

CookieTransform = Callable[[Cookie], Cookie | None]
CookieFilter = Callable[[Cookie], bool]


def write_cookies(path: str | Path, cookies: Iterable[Cookie]) -> int:
	"""Replace the file at path with one JSON object per cookie."""
	count = 0
	with open(path, 'w', encoding='utf-8') as f:
		for cookie in cookies:
			f.write(cookie.model_dump_json(by_alias=True, exclude_none=True))
			f.write('\n')
			count += 1
	return count


def read_cookies(path: str | Path) -> list[Cookie]:
	"""Read cookies written by write_cookies; a missing file yields no cookies."""
	try:
		with open(path, encoding='utf-8') as f:
			return [Cookie.model_validate_json(line) for line in f if line.strip()]
	except FileNotFoundError:
		return []


async def save_cookies(target: 'Target', path: Any, *transforms: CookieTransform) -> int:
	"""Save every browser cookie to path, applying transforms to each first.

	A transform may edit the cookie in place and return None, or return a
	replacement.
	"""
	raw_cookies = await target.get_all_cookies()
	logger.info(f'[save_cookies] cookie(s)={len(raw_cookies)}')

	cookies = []
	for raw in raw_cookies:
		cookie = Cookie.model_validate(raw)
		for transform in transforms:
			cookie = transform(cookie) or cookie
		cookies.append(cookie)

	return write_cookies(to_string(path), cookies)


async def restore_cookies(target: 'Target', path: Any, *filters: CookieFilter) -> int:
	"""Load cookies from path into the browser, keeping those all filters accept.

	Returns the number of cookies set.
	"""
	cookies = [c for c in read_cookies(to_string(path)) if all(f(c) for f in filters)]
	logger.info(f'[restore_cookies] cookie(s)={len(cookies)}')

	for cookie in cookies:
		if not await target.set_cookie(cookie.to_set_cookie_params()):  # type: ignore[arg-type]
			raise NavWaitError(f'could not set cookie {cookie.name} to {cookie.value}')
	return len(cookies)
