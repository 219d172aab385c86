# (c) Copyright Datacraft, 2026
"""Storage for rate limit counters."""
from typing import Iterator

from .models import RateLimitEntry


class RateLimitStore:
	"""Key-value storage for rate limit entries.

	Callers are responsible for locking; the store only has to make
	individual get/set/delete calls safe.
	"""

	def get(self, key: str) -> RateLimitEntry | None:
		raise NotImplementedError

	def set(self, key: str, entry: RateLimitEntry) -> None:
		raise NotImplementedError

	def delete(self, key: str) -> None:
		raise NotImplementedError

	def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
		raise NotImplementedError

	def clear(self) -> None:
		raise NotImplementedError

	def __len__(self) -> int:
		raise NotImplementedError


class InMemoryRateLimitStore(RateLimitStore):
	"""Process-local store. Counters reset on restart."""

	def __init__(self):
		self._entries: dict[str, RateLimitEntry] = {}

	def get(self, key: str) -> RateLimitEntry | None:
		return self._entries.get(key)

	def set(self, key: str, entry: RateLimitEntry) -> None:
		self._entries[key] = entry

	def delete(self, key: str) -> None:
		self._entries.pop(key, None)

	def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
		# Snapshot so callers may delete while iterating
		return iter(list(self._entries.items()))

	def clear(self) -> None:
		self._entries.clear()

	def __len__(self) -> int:
		return len(self._entries)
