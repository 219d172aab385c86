# (c) Copyright Datacraft, 2026
"""Background eviction of expired rate limit entries and MFA sessions."""
import asyncio
import contextlib
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicSweeper:
	"""
	Runs `sweep` every `interval` seconds on an asyncio task.

	The sweep itself runs in a worker thread so the event loop, and
	with it request handling, is never blocked by a long scan.
	"""

	def __init__(self, sweep: Callable[[], int], *, interval: float, name: str):
		if interval <= 0:
			raise ValueError("interval must be > 0")
		self._sweep = sweep
		self._interval = interval
		self._name = name
		self._task: asyncio.Task[None] | None = None

	@property
	def running(self) -> bool:
		return self._task is not None and not self._task.done()

	async def start(self) -> None:
		if self.running:
			return
		self._task = asyncio.create_task(self._loop(), name=self._name)
		logger.info("%s started (every %ss)", self._name, self._interval)

	async def stop(self) -> None:
		if self._task is not None:
			self._task.cancel()
			with contextlib.suppress(asyncio.CancelledError):
				await self._task
			self._task = None
			logger.info("%s stopped", self._name)

	async def run_once(self) -> int:
		removed = await asyncio.to_thread(self._sweep)
		logger.debug("%s removed %d entries", self._name, removed)
		return removed

	async def _loop(self) -> None:
		while True:
			await asyncio.sleep(self._interval)
			try:
				await self.run_once()
			except Exception:
				logger.exception("%s sweep failed, will retry", self._name)
