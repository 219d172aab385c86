# (c) Copyright Datacraft, 2026
"""Multi-Factor Authentication module."""

from .models import MFAConfig, MFAMethod, MFASession, MFAStatus
from .strategies import (
	VerificationStrategy,
	NumericCodeStrategy,
	TOTPStrategy,
	SMSStrategy,
	EmailCodeStrategy,
	BiometricStrategy,
	default_strategies,
)
from .backup import BackupCodeManager, generate_backup_codes
from .store import MFASessionStore, InMemoryMFASessionStore
from .service import MFAService

__all__ = [
	"MFAConfig",
	"MFAMethod",
	"MFASession",
	"MFAStatus",
	"VerificationStrategy",
	"NumericCodeStrategy",
	"TOTPStrategy",
	"SMSStrategy",
	"EmailCodeStrategy",
	"BiometricStrategy",
	"default_strategies",
	"BackupCodeManager",
	"generate_backup_codes",
	"MFASessionStore",
	"InMemoryMFASessionStore",
	"MFAService",
]
