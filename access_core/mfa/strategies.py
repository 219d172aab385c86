# (c) Copyright Datacraft, 2026
"""Per-method MFA code verification.

The bundled strategies only check the shape of the submitted code.
They stand in for real providers (authenticator apps, SMS and email
gateways, WebAuthn) which replace `verify` without touching the
session engine.
"""
import logging

from .models import MFAMethod

logger = logging.getLogger(__name__)


class VerificationStrategy:
	"""Verifies a code submitted for one MFA method."""

	def verify(self, code: str, user_id: str) -> bool:
		"""Return True if `code` is valid for `user_id`."""
		raise NotImplementedError


class NumericCodeStrategy(VerificationStrategy):
	"""Accepts a fixed-length, all-digit one-time code."""

	def __init__(self, digits: int = 6, label: str = "numeric"):
		self.digits = digits
		self.label = label

	def verify(self, code: str, user_id: str) -> bool:
		# str.isdigit() also accepts superscripts and other unicode digits
		if len(code) != self.digits or not (code.isascii() and code.isdigit()):
			return False
		logger.info("%s code accepted for user %s", self.label, user_id)
		return True


class TOTPStrategy(NumericCodeStrategy):
	"""Authenticator app code."""

	def __init__(self, digits: int = 6):
		super().__init__(digits=digits, label="TOTP")


class SMSStrategy(NumericCodeStrategy):
	"""Code delivered by text message."""

	def __init__(self, digits: int = 6):
		super().__init__(digits=digits, label="SMS")


class EmailCodeStrategy(VerificationStrategy):
	"""Code delivered by email."""

	def __init__(self, length: int = 8):
		self.length = length

	def verify(self, code: str, user_id: str) -> bool:
		if len(code) != self.length:
			return False
		logger.info("Email code accepted for user %s", user_id)
		return True


class BiometricStrategy(VerificationStrategy):
	"""Opaque assertion produced by a platform authenticator."""

	def verify(self, code: str, user_id: str) -> bool:
		if not code:
			return False
		logger.info("Biometric assertion accepted for user %s", user_id)
		return True


def default_strategies() -> dict[MFAMethod, VerificationStrategy]:
	"""Lookup table with one stub verifier per method."""
	return {
		MFAMethod.TOTP: TOTPStrategy(),
		MFAMethod.SMS: SMSStrategy(),
		MFAMethod.EMAIL: EmailCodeStrategy(),
		MFAMethod.BIOMETRIC: BiometricStrategy(),
	}
