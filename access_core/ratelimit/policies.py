# (c) Copyright Datacraft, 2026
"""Default per-endpoint throttling table."""
from .models import RateLimitPolicy

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS


DEFAULT_POLICIES: dict[str, RateLimitPolicy] = {
	# Authentication
	"/auth/login": RateLimitPolicy(
		window_ms=15 * MINUTE_MS,
		max_requests=5,
		skip_successful_requests=True,
	),
	"/auth/register": RateLimitPolicy(
		window_ms=HOUR_MS,
		max_requests=3,
		skip_successful_requests=True,
	),
	"/auth/reset-password": RateLimitPolicy(window_ms=HOUR_MS, max_requests=3),
	"/mfa/verify": RateLimitPolicy(window_ms=15 * MINUTE_MS, max_requests=10),

	# Profiles and matching
	"/api/profiles/search": RateLimitPolicy(window_ms=MINUTE_MS, max_requests=30),
	"/api/invitations/send": RateLimitPolicy(window_ms=HOUR_MS, max_requests=10),
	"/api/chat/messages": RateLimitPolicy(window_ms=MINUTE_MS, max_requests=60),

	# Tokens
	"/api/tokens/transfer": RateLimitPolicy(window_ms=5 * MINUTE_MS, max_requests=5),
	"/api/staking/start": RateLimitPolicy(window_ms=HOUR_MS, max_requests=10),

	# Uploads
	"/api/upload/image": RateLimitPolicy(window_ms=HOUR_MS, max_requests=20),
}
