# (c) Copyright Datacraft, 2026
"""FastAPI application exposing the rate limiter and MFA engines."""
import logging
from contextlib import asynccontextmanager
from typing import Mapping

from fastapi import FastAPI

from .clock import Clock, system_clock
from .config import Settings, get_settings
from .mfa.models import MFAConfig
from .mfa.router import router as mfa_router
from .mfa.service import MFAService
from .ratelimit.limiter import RateLimiter
from .ratelimit.models import RateLimitPolicy
from .ratelimit.policies import DEFAULT_POLICIES
from .ratelimit.router import router as rate_limit_router
from .sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


def create_app(
	settings: Settings | None = None,
	policies: Mapping[str, RateLimitPolicy] | None = None,
	clock: Clock | None = None,
) -> FastAPI:
	"""Build the app with its own engines and cleanup sweepers.

	State is process-local: counters and in-flight MFA sessions are
	lost when the process restarts.
	"""
	settings = settings or get_settings()
	clock = clock or system_clock

	rate_limiter = RateLimiter(
		DEFAULT_POLICIES if policies is None else policies,
		clock=clock,
		warn_remaining=settings.rate_limit_warn_remaining,
	)
	mfa_service = MFAService(config=MFAConfig.from_settings(settings), clock=clock)

	sweepers = [
		PeriodicSweeper(
			rate_limiter.cleanup,
			interval=settings.cleanup_interval_seconds,
			name="rate-limit-cleanup",
		),
		PeriodicSweeper(
			mfa_service.cleanup,
			interval=settings.cleanup_interval_seconds,
			name="mfa-session-cleanup",
		),
	]

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		for sweeper in sweepers:
			await sweeper.start()
		try:
			yield
		finally:
			for sweeper in sweepers:
				await sweeper.stop()

	app = FastAPI(title="access-core", lifespan=lifespan)
	app.state.rate_limiter = rate_limiter
	app.state.mfa_service = mfa_service
	app.state.sweepers = sweepers

	app.include_router(mfa_router)
	app.include_router(rate_limit_router)

	return app
