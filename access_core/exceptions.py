# (c) Copyright Datacraft, 2026
"""Exceptions raised by the access-control core."""


class AccessCoreError(Exception):
	"""Base class for errors raised by access_core."""


class UnsupportedMFAMethodError(AccessCoreError, ValueError):
	"""MFA session requested for a method that is not enabled."""

	def __init__(self, method):
		self.method = method
		super().__init__(f"MFA method {method} not supported")


class InvalidTransitionError(AccessCoreError):
	"""MFA session asked to leave a terminal state."""

	def __init__(self, current, target):
		self.current = current
		self.target = target
		super().__init__(f"Cannot move MFA session from {current} to {target}")
