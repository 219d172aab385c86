# (c) Copyright Datacraft, 2026
"""Fixed-window rate limiting engine."""
import logging
import math
import threading
from collections import Counter
from typing import Any, Mapping

from access_core.clock import Clock, system_clock
from access_core.locks import StripedLock

from .models import Outcome, RateLimitEntry, RateLimitPolicy, RateLimitResult
from .store import InMemoryRateLimitStore, RateLimitStore

logger = logging.getLogger(__name__)


def mask_identifier(identifier: str) -> str:
	"""Partially hide an identifier (IP, email, user id) for logs."""
	return identifier[:8] + "***"


class RateLimiter:
	"""
	Per-endpoint request throttling over fixed time windows.

	Each (endpoint, identifier) pair gets a counter that resets in bulk
	when its window elapses, so a caller can burst up to twice
	`max_requests` across a window boundary. Endpoints without a
	policy fail open.
	"""

	def __init__(
		self,
		policies: Mapping[str, RateLimitPolicy],
		store: RateLimitStore | None = None,
		clock: Clock | None = None,
		warn_remaining: int = 2,
	):
		self._policies = dict(policies)
		self.store = store if store is not None else InMemoryRateLimitStore()
		self.clock = clock or system_clock
		self.warn_remaining = warn_remaining
		self._locks = StripedLock()
		self._unconfigured_hits: Counter[str] = Counter()
		self._unconfigured_lock = threading.Lock()

	@property
	def policies(self) -> dict[str, RateLimitPolicy]:
		return dict(self._policies)

	def has_policy(self, endpoint_key: str) -> bool:
		return endpoint_key in self._policies

	def _generate_key(self, endpoint_key: str, identifier: str) -> str:
		policy = self._policies.get(endpoint_key)
		if policy is not None and policy.key_generator is not None:
			return policy.key_generator(identifier)
		return f"{endpoint_key}:{identifier}"

	def _fail_open(self, endpoint_key: str) -> RateLimitResult:
		with self._unconfigured_lock:
			self._unconfigured_hits[endpoint_key] += 1
		logger.warning(
			"No rate limit policy for %s, allowing request",
			endpoint_key,
		)
		return RateLimitResult(allowed=True, remaining=math.inf, reset_time=None)

	def check_limit(
		self,
		endpoint_key: str,
		identifier: str,
		outcome: Outcome | None = None,
	) -> RateLimitResult:
		"""
		Record a request and decide whether it may proceed.

		Args:
			endpoint_key: Logical endpoint name the policy is keyed by
			identifier: Caller identity (IP, user id, email, ...)
			outcome: Result of the throttled operation, if already known.
				Calls without an outcome always count.

		Returns:
			RateLimitResult with the decision and remaining quota
		"""
		policy = self._policies.get(endpoint_key)
		if policy is None:
			return self._fail_open(endpoint_key)

		key = self._generate_key(endpoint_key, identifier)

		with self._locks(key):
			now = self.clock.now()
			entry = self.store.get(key)

			if entry is None or entry.is_expired(now):
				entry = RateLimitEntry(
					endpoint_key=endpoint_key,
					count=0,
					reset_time=now + policy.window,
					first_request_time=now,
				)
				self.store.set(key, entry)

			if policy.counts(outcome):
				entry.count += 1

			count = entry.count
			reset_time = entry.reset_time

		remaining = max(0, policy.max_requests - count)
		allowed = count <= policy.max_requests

		result = RateLimitResult(
			allowed=allowed,
			remaining=remaining,
			reset_time=reset_time,
			retry_after=None if allowed else self._retry_after(reset_time, now),
		)

		if not allowed:
			logger.warning(
				"Rate limit exceeded for %s by %s (count=%d, max=%d, window_ms=%d, retry_after=%ds)",
				endpoint_key,
				mask_identifier(identifier),
				count,
				policy.max_requests,
				policy.window_ms,
				result.retry_after,
			)
		elif remaining <= self.warn_remaining:
			logger.info(
				"Rate limit nearly reached for %s (remaining=%d, max=%d)",
				endpoint_key,
				remaining,
				policy.max_requests,
			)

		return result

	def peek(self, endpoint_key: str, identifier: str) -> RateLimitResult:
		"""Report the current quota without counting a request."""
		policy = self._policies.get(endpoint_key)
		if policy is None:
			return RateLimitResult(allowed=True, remaining=math.inf, reset_time=None)

		key = self._generate_key(endpoint_key, identifier)
		with self._locks(key):
			now = self.clock.now()
			entry = self.store.get(key)
			if entry is None or entry.is_expired(now):
				return RateLimitResult(
					allowed=True,
					remaining=policy.max_requests,
					reset_time=now + policy.window,
				)
			count = entry.count
			reset_time = entry.reset_time

		allowed = count <= policy.max_requests
		return RateLimitResult(
			allowed=allowed,
			remaining=max(0, policy.max_requests - count),
			reset_time=reset_time,
			retry_after=None if allowed else self._retry_after(reset_time, now),
		)

	@staticmethod
	def _retry_after(reset_time, now) -> int:
		# A denied call at exactly reset_time still waits a full second
		return max(1, math.ceil((reset_time - now).total_seconds()))

	def reset_limit(self, endpoint_key: str, identifier: str) -> None:
		"""Drop the counter for an identifier, e.g. after a successful login."""
		key = self._generate_key(endpoint_key, identifier)
		with self._locks(key):
			self.store.delete(key)

		logger.info(
			"Rate limit reset for %s by %s",
			endpoint_key,
			mask_identifier(identifier),
		)

	def get_stats(self) -> dict[str, Any]:
		endpoints: Counter[str] = Counter()
		for _, entry in self.store.items():
			endpoints[entry.endpoint_key] += 1

		with self._unconfigured_lock:
			unconfigured = dict(self._unconfigured_hits)

		return {
			"total_entries": len(self.store),
			"endpoints": dict(endpoints),
			"unconfigured_hits": unconfigured,
		}

	def cleanup(self) -> int:
		"""Delete entries whose window has elapsed.

		Returns:
			Number of entries removed
		"""
		removed = 0
		for key, _ in self.store.items():
			with self._locks(key):
				entry = self.store.get(key)
				if entry is not None and entry.is_expired(self.clock.now()):
					self.store.delete(key)
					removed += 1

		if removed:
			logger.info(
				"Rate limiter cleanup removed %d entries, %d remaining",
				removed,
				len(self.store),
			)
		return removed

	def destroy(self) -> None:
		self.store.clear()
		with self._unconfigured_lock:
			self._unconfigured_hits.clear()
