# (c) Copyright Datacraft, 2026
"""FastAPI dependency that throttles a route through the RateLimiter."""
import math
from typing import Callable

from fastapi import HTTPException, Request, Response, status

from .models import RateLimitResult


def client_host(request: Request) -> str:
	"""Default rate limit identifier: the client address."""
	if request.client is None:
		return "unknown"
	return request.client.host


class RateLimit:
	"""
	Route dependency enforcing the policy registered for `endpoint_key`.

	Usage::

		@router.post("/login", dependencies=[Depends(RateLimit("/auth/login"))])

	Args:
		endpoint_key: Policy name in the limiter's table
		identifier: Callable deriving the caller identity from the request.
			Defaults to the client host.
	"""

	def __init__(
		self,
		endpoint_key: str,
		identifier: Callable[[Request], str] | None = None,
	):
		self.endpoint_key = endpoint_key
		self.identifier = identifier

	def _identify(self, request: Request) -> str:
		if self.identifier is not None:
			return self.identifier(request)
		return client_host(request)

	async def __call__(self, request: Request, response: Response) -> RateLimitResult:
		limiter = request.app.state.rate_limiter
		result = limiter.check_limit(self.endpoint_key, self._identify(request))

		headers = rate_limit_headers(result)
		if not result.allowed:
			headers["Retry-After"] = str(result.retry_after)
			raise HTTPException(
				status_code=status.HTTP_429_TOO_MANY_REQUESTS,
				detail="Too many requests",
				headers=headers,
			)

		response.headers.update(headers)
		return result


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
	if math.isinf(result.remaining):
		return {}
	headers = {"X-RateLimit-Remaining": str(result.remaining)}
	if result.reset_time is not None:
		headers["X-RateLimit-Reset"] = str(int(result.reset_time.timestamp()))
	return headers
