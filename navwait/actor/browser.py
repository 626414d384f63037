"""Browser class for tab management over CDP."""

from typing import TYPE_CHECKING, Union

from navwait.actor.target import Target

if TYPE_CHECKING:
	from cdp_use.cdp.target.commands import CloseTargetParameters, CreateTargetParameters
	from cdp_use.client import CDPClient


class Browser:
	"""Creates, lists and closes page targets."""

	def __init__(self, client: 'CDPClient'):
		self._client = client

	async def new_target(self, url: str = 'about:blank') -> Target:
		"""Create a new tab and attach a session to it."""
		params: 'CreateTargetParameters' = {'url': url}
		result = await self._client.send.Target.createTarget(params)

		target = Target(self._client, result['targetId'])
		await target._ensure_session()
		return target

	async def get_targets(self) -> list[Target]:
		"""Page targets currently open in the browser."""
		result = await self._client.send.Target.getTargets()
		return [Target(self._client, info['targetId']) for info in result['targetInfos'] if info['type'] == 'page']

	async def close_target(self, target: Union[Target, str]) -> None:
		"""Close a target by Target object or target ID."""
		target_id = target.target_id if isinstance(target, Target) else str(target)
		params: 'CloseTargetParameters' = {'targetId': target_id}
		await self._client.send.Target.closeTarget(params)
