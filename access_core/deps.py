# (c) Copyright Datacraft, 2026
"""FastAPI dependencies resolving the engines attached to the app."""
from fastapi import Request

from access_core.mfa.service import MFAService
from access_core.ratelimit.limiter import RateLimiter


def get_rate_limiter(request: Request) -> RateLimiter:
	return request.app.state.rate_limiter


def get_mfa_service(request: Request) -> MFAService:
	return request.app.state.mfa_service

