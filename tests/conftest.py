"""
Shared test fixtures.

Every engine is built on a FrozenClock so tests move time explicitly
instead of sleeping.
"""
import pytest
from fastapi.testclient import TestClient

from access_core.app import create_app
from access_core.clock import FrozenClock
from access_core.config import Settings
from access_core.mfa.models import MFAConfig
from access_core.mfa.service import MFAService
from access_core.ratelimit.limiter import RateLimiter
from access_core.ratelimit.models import RateLimitPolicy


@pytest.fixture
def clock():
	return FrozenClock()


@pytest.fixture
def policies():
	return {
		"loginApi": RateLimitPolicy(window_ms=60_000, max_requests=3),
		"/auth/login": RateLimitPolicy(
			window_ms=15 * 60_000,
			max_requests=5,
			skip_successful_requests=True,
		),
		"/upload": RateLimitPolicy(
			window_ms=60_000,
			max_requests=2,
			skip_failed_requests=True,
		),
	}


@pytest.fixture
def limiter(policies, clock):
	return RateLimiter(policies, clock=clock)


@pytest.fixture
def mfa_service(clock):
	return MFAService(config=MFAConfig(), clock=clock)


@pytest.fixture
def app(clock):
	return create_app(settings=Settings(), clock=clock)


@pytest.fixture
def client(app):
	with TestClient(app) as tc:
		yield tc
