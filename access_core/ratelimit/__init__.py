# (c) Copyright Datacraft, 2026
"""Request throttling module."""

from .models import Outcome, RateLimitEntry, RateLimitPolicy, RateLimitResult
from .store import RateLimitStore, InMemoryRateLimitStore
from .policies import DEFAULT_POLICIES
from .limiter import RateLimiter

__all__ = [
	"Outcome",
	"RateLimitEntry",
	"RateLimitPolicy",
	"RateLimitResult",
	"RateLimitStore",
	"InMemoryRateLimitStore",
	"DEFAULT_POLICIES",
	"RateLimiter",
]
