# (c) Copyright Datacraft, 2026
"""Request throttling and MFA session management."""
from .clock import Clock, SystemClock, FrozenClock
from .exceptions import AccessCoreError, UnsupportedMFAMethodError, InvalidTransitionError
from .ratelimit import Outcome, RateLimitPolicy, RateLimitResult, RateLimiter, DEFAULT_POLICIES
from .mfa import MFAConfig, MFAMethod, MFASession, MFAStatus, MFAService
from .sweeper import PeriodicSweeper

__all__ = [
	'Clock',
	'SystemClock',
	'FrozenClock',
	'AccessCoreError',
	'UnsupportedMFAMethodError',
	'InvalidTransitionError',
	'Outcome',
	'RateLimitPolicy',
	'RateLimitResult',
	'RateLimiter',
	'DEFAULT_POLICIES',
	'MFAConfig',
	'MFAMethod',
	'MFASession',
	'MFAStatus',
	'MFAService',
	'PeriodicSweeper',
]
