"""Environment-driven defaults for navwait."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

load_dotenv()


class NavWaitConfig(BaseModel):
	"""Defaults read from NAVWAIT_* environment variables."""

	model_config = ConfigDict(extra='ignore')

	NAVWAIT_LOGGING_LEVEL: str = 'info'
	NAVWAIT_RESPONSE_TIMEOUT: float = 30.0
	NAVWAIT_LOAD_TIMEOUT: float = 30.0
	NAVWAIT_RELOAD_INTERVAL: float = 1.0
	NAVWAIT_STRICT_STATUSES: str = '400,410'
	NAVWAIT_CDP_URL: str | None = None
	NAVWAIT_CHROME_PATH: str | None = None
	NAVWAIT_HEADLESS: bool = True

	@field_validator('NAVWAIT_STRICT_STATUSES')
	@classmethod
	def _validate_statuses(cls, value: str) -> str:
		for part in value.split(','):
			if part.strip() and not part.strip().isdigit():
				raise ValueError(f'invalid HTTP status in NAVWAIT_STRICT_STATUSES: {part!r}')
		return value

	@property
	def strict_statuses(self) -> frozenset[int]:
		return frozenset(int(part) for part in self.NAVWAIT_STRICT_STATUSES.split(',') if part.strip())

	@classmethod
	def from_env(cls, environ: dict[str, str] | None = None) -> 'NavWaitConfig':
		environ = os.environ if environ is None else environ
		values = {name: environ[name] for name in cls.model_fields if environ.get(name)}
		return cls.model_validate(values)


CONFIG = NavWaitConfig.from_env()
