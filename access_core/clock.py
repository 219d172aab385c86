# (c) Copyright Datacraft, 2026
"""Time sources for the throttling and MFA engines."""
from datetime import datetime, timedelta, timezone


class Clock:
	"""Source of the current time (timezone-aware, UTC)."""

	def now(self) -> datetime:
		raise NotImplementedError


class SystemClock(Clock):
	"""Wall clock."""

	def now(self) -> datetime:
		return datetime.now(timezone.utc)


class FrozenClock(Clock):
	"""Clock that only moves when told to.

	Used by tests to fast-forward past windows and session expiry
	without sleeping.
	"""

	def __init__(self, start: datetime | None = None):
		self._now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

	def now(self) -> datetime:
		return self._now

	def advance(self, delta: timedelta | None = None, **kwargs) -> datetime:
		"""Move the clock forward by `delta` or by timedelta(**kwargs)."""
		self._now += delta if delta is not None else timedelta(**kwargs)
		return self._now

	def set(self, when: datetime) -> None:
		self._now = when


system_clock = SystemClock()
