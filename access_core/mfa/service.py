# (c) Copyright Datacraft, 2026
"""MFA service for managing multi-factor authentication sessions."""

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from access_core.clock import Clock, system_clock
from access_core.exceptions import UnsupportedMFAMethodError
from access_core.locks import StripedLock

from .backup import BackupCodeManager
from .models import MFAConfig, MFAMethod, MFASession, MFAStatus
from .store import InMemoryMFASessionStore, MFASessionStore
from .strategies import VerificationStrategy, default_strategies

logger = logging.getLogger(__name__)


@dataclass
class MFAService:
	"""
	Drives MFA sessions through PENDING -> VERIFIED | FAILED | EXPIRED.

	Verification is delegated to the strategy registered for the
	session's method. Failures are reported as False, never raised;
	only `initiate_mfa` raises, for methods that are not enabled.
	"""

	config: MFAConfig = field(default_factory=MFAConfig)
	strategies: dict[MFAMethod, VerificationStrategy] = field(default_factory=default_strategies)
	store: MFASessionStore = field(default_factory=InMemoryMFASessionStore)
	backup_manager: BackupCodeManager | None = None
	clock: Clock = system_clock

	def __post_init__(self):
		if self.backup_manager is None:
			self.backup_manager = BackupCodeManager(code_count=self.config.backup_codes_count)
		self._locks = StripedLock()

	def _resolve_method(self, method: MFAMethod | str) -> MFAMethod:
		try:
			resolved = MFAMethod(method)
		except ValueError:
			raise UnsupportedMFAMethodError(method) from None

		if (
			not self.config.enabled
			or resolved not in self.config.methods
			or resolved not in self.strategies
		):
			raise UnsupportedMFAMethodError(resolved.value)
		return resolved

	def initiate_mfa(self, user_id: str, method: MFAMethod | str) -> str:
		"""Start an MFA challenge.

		Args:
			user_id: User being challenged
			method: MFA method the challenge is delivered through

		Returns:
			Session id to pass to `verify_mfa`

		Raises:
			UnsupportedMFAMethodError: method is unknown or not enabled
		"""
		resolved = self._resolve_method(method)
		now = self.clock.now()

		session = MFASession(
			session_id=str(uuid.uuid4()),
			user_id=user_id,
			method=resolved,
			max_attempts=self.config.max_attempts,
			timestamp=now,
			expires_at=now + timedelta(seconds=self.config.session_duration_seconds),
		)
		self.store.save(session)

		logger.info(
			"MFA session %s initiated for user %s via %s (expires %s)",
			session.session_id,
			user_id,
			resolved.value,
			session.expires_at.isoformat(),
		)
		return session.session_id

	def verify_mfa(self, session_id: str, code: str) -> bool:
		"""Check a code against a pending session.

		An attempt is consumed before the code is evaluated. Terminal
		sessions are never re-processed.

		Returns:
			True only when this call moved the session to VERIFIED
		"""
		with self._locks(session_id):
			session = self.store.get(session_id)

			if session is None:
				logger.warning("MFA session %s not found", session_id)
				return False

			if session.status.is_terminal:
				logger.warning(
					"MFA session %s already %s",
					session_id,
					session.status.value,
				)
				return False

			now = self.clock.now()

			if session.is_expired(now):
				session.transition(MFAStatus.EXPIRED)
				self.store.save(session)
				logger.warning("MFA session %s expired", session_id)
				return False

			if session.attempts >= session.max_attempts:
				session.transition(MFAStatus.FAILED)
				self.store.save(session)
				logger.warning("MFA session %s exceeded max attempts", session_id)
				return False

			session.attempts += 1
			is_valid = self._verify_code(session, code)

			if is_valid:
				session.transition(MFAStatus.VERIFIED)
				session.verified_at = now
				self.store.save(session)
				logger.info(
					"MFA verified for user %s via %s after %d attempt(s)",
					session.user_id,
					session.method.value,
					session.attempts,
				)
				return True

			if session.attempts >= session.max_attempts:
				session.transition(MFAStatus.FAILED)
			self.store.save(session)

		logger.warning(
			"Invalid MFA code for user %s via %s (attempt %d of %d)",
			session.user_id,
			session.method.value,
			session.attempts,
			session.max_attempts,
		)
		return False

	def _verify_code(self, session: MFASession, code: str) -> bool:
		strategy = self.strategies.get(session.method)
		if strategy is None:
			logger.error("No verification strategy registered for %s", session.method.value)
			return False

		try:
			return bool(strategy.verify(code, session.user_id))
		except Exception:
			logger.exception(
				"%s verification raised for session %s, counting as failed attempt",
				session.method.value,
				session.session_id,
			)
			return False

	def get_session(self, session_id: str) -> MFASession | None:
		return self.store.get(session_id)

	def generate_backup_codes(self, user_id: str, count: int | None = None) -> list[str]:
		"""Issue a new set of backup codes, invalidating the previous set."""
		return self.backup_manager.generate_codes(
			user_id,
			count if count is not None else self.config.backup_codes_count,
		)

	def verify_backup_code(self, user_id: str, code: str) -> bool:
		"""Redeem a single-use backup code."""
		return self.backup_manager.verify_and_consume(user_id, code)

	def remaining_backup_codes(self, user_id: str) -> int:
		return self.backup_manager.count_remaining(user_id)

	def get_statistics(self) -> dict[str, Any]:
		sessions = list(self.store.values())
		by_status = Counter(s.status for s in sessions)
		by_method = Counter(s.method.value for s in sessions)

		return {
			"total_sessions": len(sessions),
			"verified": by_status[MFAStatus.VERIFIED],
			"failed": by_status[MFAStatus.FAILED],
			"expired": by_status[MFAStatus.EXPIRED],
			"pending": by_status[MFAStatus.PENDING],
			"by_method": dict(by_method),
		}

	def cleanup(self) -> int:
		"""Remove sessions past their expiry.

		Returns:
			Number of sessions removed
		"""
		removed = 0
		for session in self.store.values():
			with self._locks(session.session_id):
				current = self.store.get(session.session_id)
				if current is not None and current.is_expired(self.clock.now()):
					self.store.delete(session.session_id)
					removed += 1

		if removed:
			logger.info("MFA cleanup removed %d sessions", removed)
		return removed

	def get_config(self) -> MFAConfig:
		return self.config.model_copy()

	def update_config(self, **changes) -> MFAConfig:
		"""Merge `changes` into the config. Existing sessions keep their limits."""
		self.config = MFAConfig.model_validate(
			{**self.config.model_dump(), **changes}
		)
		logger.info("MFA config updated: %s", ", ".join(sorted(changes)))
		return self.config
