from navwait.cookies.service import read_cookies, restore_cookies, save_cookies, write_cookies
from navwait.cookies.views import Cookie

__all__ = ['Cookie', 'read_cookies', 'restore_cookies', 'save_cookies', 'write_cookies']
