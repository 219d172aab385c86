# (c) Copyright Datacraft, 2026
"""Backup codes for MFA recovery."""

import hashlib
import logging
import secrets
import string
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


@dataclass
class BackupCode:
	"""A backup code."""
	code: str
	hash: str


def generate_backup_codes(
	count: int = 10,
	length: int = 8,
) -> list[BackupCode]:
	"""Generate unique backup codes for MFA recovery.

	Args:
		count: Number of codes to generate
		length: Characters per code

	Returns:
		List of BackupCode instances
	"""
	seen: set[str] = set()
	codes = []

	while len(codes) < count:
		code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
		if code in seen:
			continue
		seen.add(code)
		codes.append(BackupCode(code=code, hash=hash_backup_code(code)))

	return codes


def hash_backup_code(code: str) -> str:
	"""Hash a backup code for storage.

	Args:
		code: Plain text backup code

	Returns:
		SHA-256 hash of the code
	"""
	# Normalize: remove separators and lowercase
	normalized = code.replace("-", "").replace(" ", "").lower()
	return hashlib.sha256(normalized.encode()).hexdigest()


class BackupCodeManager:
	"""Issues and redeems single-use backup codes per user.

	Only hashes are kept. Generating a new set replaces the previous
	one, so old unused codes stop working.
	"""

	def __init__(self, code_count: int = 10, length: int = 8):
		"""Initialize backup code manager.

		Args:
			code_count: Default number of backup codes to generate
			length: Characters per code
		"""
		self.code_count = code_count
		self.length = length
		self._hashes: dict[str, list[str]] = {}
		self._lock = threading.Lock()

	def generate_codes(self, user_id: str, count: int | None = None) -> list[str]:
		"""Generate a fresh set of codes for a user.

		Returns:
			Plain text codes, to be shown to the user once
		"""
		codes = generate_backup_codes(
			count=count if count is not None else self.code_count,
			length=self.length,
		)
		with self._lock:
			self._hashes[user_id] = [c.hash for c in codes]

		logger.info("Backup codes generated for user %s (count=%d)", user_id, len(codes))
		return [c.code for c in codes]

	def verify_and_consume(self, user_id: str, code: str) -> bool:
		"""Redeem a backup code.

		Args:
			user_id: Owner of the code set
			code: Plain text backup code

		Returns:
			True if the code was valid; it is removed and cannot be reused
		"""
		code_hash = hash_backup_code(code)

		with self._lock:
			stored_hashes = self._hashes.get(user_id)
			if not stored_hashes:
				return False

			for i, stored_hash in enumerate(stored_hashes):
				if secrets.compare_digest(code_hash, stored_hash):
					del stored_hashes[i]
					break
			else:
				return False

		logger.info("Backup code redeemed for user %s", user_id)
		return True

	def count_remaining(self, user_id: str) -> int:
		"""Number of unused backup codes for a user."""
		with self._lock:
			return len(self._hashes.get(user_id, []))

	def revoke(self, user_id: str) -> None:
		with self._lock:
			self._hashes.pop(user_id, None)
