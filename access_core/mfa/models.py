# (c) Copyright Datacraft, 2026
"""MFA session data model."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from access_core.config import Settings
from access_core.exceptions import InvalidTransitionError


class MFAMethod(str, Enum):
	"""Supported MFA methods."""
	TOTP = "totp"
	SMS = "sms"
	EMAIL = "email"
	BIOMETRIC = "biometric"

	@classmethod
	def _missing_(cls, value):
		# Accept "TOTP" as well as "totp"
		if isinstance(value, str):
			for member in cls:
				if member.value == value.lower():
					return member
		return None


class MFAStatus(str, Enum):
	"""MFA session status."""
	PENDING = "pending"
	VERIFIED = "verified"
	FAILED = "failed"
	EXPIRED = "expired"

	@property
	def is_terminal(self) -> bool:
		return self is not MFAStatus.PENDING


class MFASession(BaseModel):
	"""A single MFA challenge from initiation to a terminal state."""
	session_id: str
	user_id: str
	method: MFAMethod
	status: MFAStatus = MFAStatus.PENDING
	attempts: int = 0
	max_attempts: int
	timestamp: datetime
	expires_at: datetime
	verified_at: datetime | None = None

	@property
	def attempts_remaining(self) -> int:
		return max(0, self.max_attempts - self.attempts)

	def is_expired(self, now: datetime) -> bool:
		return now > self.expires_at

	def transition(self, target: MFAStatus) -> None:
		"""Move out of PENDING. Terminal states never change again."""
		if self.status.is_terminal or target is MFAStatus.PENDING:
			raise InvalidTransitionError(self.status, target)
		self.status = target


class MFAConfig(BaseModel):
	"""Runtime MFA configuration."""
	enabled: bool = True
	methods: list[MFAMethod] = Field(default_factory=lambda: list(MFAMethod))
	required_for_admin: bool = True
	required_for_sensitive_ops: bool = True
	backup_codes_count: int = Field(gt=0, default=10)
	session_duration_seconds: int = Field(gt=0, default=15 * 60)
	max_attempts: int = Field(gt=0, default=5)

	@classmethod
	def from_settings(cls, settings: Settings) -> "MFAConfig":
		return cls(
			enabled=settings.mfa_enabled,
			methods=settings.mfa_methods,
			required_for_admin=settings.mfa_required_for_admin,
			required_for_sensitive_ops=settings.mfa_required_for_sensitive_ops,
			backup_codes_count=settings.mfa_backup_codes_count,
			session_duration_seconds=settings.mfa_session_duration_seconds,
			max_attempts=settings.mfa_max_attempts,
		)
