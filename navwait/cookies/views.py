"""Cookie records as stored in JSON lines files."""

from pydantic import BaseModel, ConfigDict, Field


class Cookie(BaseModel):
	"""A browser cookie using CDP field names on the wire."""

	model_config = ConfigDict(extra='allow', populate_by_name=True)

	name: str
	value: str
	domain: str = ''
	path: str = '/'
	expires: float = Field(default=-1, description='Seconds since epoch, -1 for session cookies')
	http_only: bool = Field(default=False, alias='httpOnly')
	secure: bool = False
	session: bool = False
	same_site: str | None = Field(default=None, alias='sameSite')
	priority: str | None = None

	def to_set_cookie_params(self) -> dict:
		"""Parameters for Network.setCookie."""
		params: dict = {
			'name': self.name,
			'value': self.value,
			'domain': self.domain,
			'path': self.path,
			'secure': self.secure,
			'httpOnly': self.http_only,
		}
		if self.same_site:
			params['sameSite'] = self.same_site
		if self.priority:
			params['priority'] = self.priority
		if not self.session and self.expires > 0:
			params['expires'] = self.expires
		return params
