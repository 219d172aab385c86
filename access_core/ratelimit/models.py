# (c) Copyright Datacraft, 2026
"""Rate limiting data model."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field


class Outcome(str, Enum):
	"""Result of the operation being throttled."""
	SUCCESS = "success"
	FAILURE = "failure"


class RateLimitPolicy(BaseModel):
	"""Static throttling policy for one logical endpoint."""
	window_ms: int = Field(gt=0, description="Length of the fixed window in milliseconds")
	max_requests: int = Field(ge=1, description="Requests allowed per window")
	skip_successful_requests: bool = False
	skip_failed_requests: bool = False
	key_generator: Callable[[str], str] | None = None

	model_config = ConfigDict(frozen=True)

	@property
	def window(self) -> timedelta:
		return timedelta(milliseconds=self.window_ms)

	def counts(self, outcome: Outcome | None) -> bool:
		"""Whether a call reporting `outcome` consumes quota."""
		if outcome is None:
			return True
		if outcome == Outcome.SUCCESS:
			return not self.skip_successful_requests
		return not self.skip_failed_requests


@dataclass
class RateLimitEntry:
	"""Counter for one policy x identifier within the current window."""
	endpoint_key: str
	count: int
	reset_time: datetime
	first_request_time: datetime

	def is_expired(self, now: datetime) -> bool:
		return self.reset_time < now


@dataclass
class RateLimitResult:
	"""Decision returned by RateLimiter.check_limit."""
	allowed: bool
	remaining: int | float
	reset_time: datetime | None
	retry_after: int | None = None
