# (c) Copyright Datacraft, 2026
"""Per-key mutual exclusion for the in-memory stores."""
import threading
import zlib


class StripedLock:
	"""
	Fixed pool of locks addressed by key.

	Two operations on the same key always serialize; operations on
	different keys usually proceed in parallel. Memory stays bounded
	regardless of how many keys pass through.
	"""

	def __init__(self, stripes: int = 64):
		if stripes < 1:
			raise ValueError("stripes must be >= 1")
		self._locks = [threading.Lock() for _ in range(stripes)]

	def __call__(self, key: str) -> threading.Lock:
		# crc32 rather than hash() so the mapping is stable across runs
		index = zlib.crc32(key.encode("utf-8")) % len(self._locks)
		return self._locks[index]

	def __len__(self) -> int:
		return len(self._locks)
