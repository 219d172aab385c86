# (c) Copyright Datacraft, 2026
"""Rate limiting operations API."""
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from access_core.deps import get_rate_limiter

from .limiter import RateLimiter

router = APIRouter(prefix="/rate-limit", tags=["Rate limiting"])


class RateLimitStatsResponse(BaseModel):
	"""Tracked counters grouped by endpoint."""
	total_entries: int
	endpoints: dict[str, int]
	unconfigured_hits: dict[str, int]


class RateLimitResetRequest(BaseModel):
	"""Request to clear the counter of one identifier."""
	endpoint_key: str
	identifier: str


@router.get("/stats", response_model=RateLimitStatsResponse)
async def get_rate_limit_stats(
	limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
):
	"""Current counters, for operational visibility."""
	return RateLimitStatsResponse(**limiter.get_stats())


@router.post("/reset", response_model=dict)
async def reset_rate_limit(
	request: RateLimitResetRequest,
	limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
):
	"""Manually clear a counter, e.g. after support unblocks a user."""
	limiter.reset_limit(request.endpoint_key, request.identifier)
	return {"success": True}
