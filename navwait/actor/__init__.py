from navwait.actor.browser import Browser
from navwait.actor.target import Target

__all__ = ['Browser', 'Target']
