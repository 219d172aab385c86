# (c) Copyright Datacraft, 2026
"""MFA API router."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from access_core.deps import get_mfa_service
from access_core.exceptions import UnsupportedMFAMethodError
from access_core.ratelimit.dependency import RateLimit

from .models import MFAMethod, MFASession, MFAStatus
from .service import MFAService

router = APIRouter(prefix="/mfa", tags=["MFA"])


class MFAInitiateRequest(BaseModel):
	"""Request to start an MFA challenge."""
	user_id: str
	method: MFAMethod


class MFAInitiateResponse(BaseModel):
	"""Response for MFA initiation."""
	session_id: str
	method: MFAMethod
	expires_at: datetime


class MFAVerifyRequest(BaseModel):
	"""Request to verify an MFA code."""
	code: str


class MFAVerifyResponse(BaseModel):
	"""Response from MFA verification."""
	success: bool
	status: MFAStatus
	attempts_remaining: int


class BackupCodesRequest(BaseModel):
	"""Request to (re)generate backup codes."""
	user_id: str
	count: int | None = Field(default=None, gt=0, le=100)


class BackupCodesResponse(BaseModel):
	"""Response with new backup codes."""
	codes: list[str]
	remaining: int


class BackupCodeVerifyRequest(BaseModel):
	"""Request to redeem a backup code."""
	user_id: str
	code: str


class BackupCodeVerifyResponse(BaseModel):
	"""Response from backup code redemption."""
	success: bool
	remaining: int


class MFAStatisticsResponse(BaseModel):
	"""Session counts by status and method."""
	total_sessions: int
	verified: int
	failed: int
	expired: int
	pending: int
	by_method: dict[str, int]


def _get_session_or_404(service: MFAService, session_id: str) -> MFASession:
	session = service.get_session(session_id)
	if session is None:
		raise HTTPException(
			status_code=status.HTTP_404_NOT_FOUND,
			detail="MFA session not found",
		)
	return session


@router.post("/sessions", response_model=MFAInitiateResponse, status_code=status.HTTP_201_CREATED)
async def initiate_mfa(
	request: MFAInitiateRequest,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Start an MFA challenge. Delivering the code is up to the caller."""
	try:
		session_id = service.initiate_mfa(request.user_id, request.method)
	except UnsupportedMFAMethodError as e:
		raise HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail=str(e),
		)

	session = service.get_session(session_id)
	return MFAInitiateResponse(
		session_id=session_id,
		method=session.method,
		expires_at=session.expires_at,
	)


@router.get("/sessions/{session_id}", response_model=MFASession)
async def get_mfa_session(
	session_id: str,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Get the current state of an MFA session."""
	return _get_session_or_404(service, session_id)


@router.post(
	"/sessions/{session_id}/verify",
	response_model=MFAVerifyResponse,
	dependencies=[Depends(RateLimit("/mfa/verify"))],
)
async def verify_mfa(
	session_id: str,
	request: MFAVerifyRequest,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Verify a code for a pending MFA session."""
	session = _get_session_or_404(service, session_id)
	success = service.verify_mfa(session_id, request.code)
	# Cleanup may evict an expired session between the two reads
	session = service.get_session(session_id) or session

	return MFAVerifyResponse(
		success=success,
		status=session.status,
		attempts_remaining=session.attempts_remaining,
	)


@router.post("/backup-codes", response_model=BackupCodesResponse)
async def generate_backup_codes(
	request: BackupCodesRequest,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Generate backup codes, replacing any existing set."""
	codes = service.generate_backup_codes(request.user_id, request.count)
	return BackupCodesResponse(codes=codes, remaining=len(codes))


@router.post("/backup-codes/verify", response_model=BackupCodeVerifyResponse)
async def verify_backup_code(
	request: BackupCodeVerifyRequest,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Redeem a backup code during login."""
	success = service.verify_backup_code(request.user_id, request.code)
	return BackupCodeVerifyResponse(
		success=success,
		remaining=service.remaining_backup_codes(request.user_id),
	)


@router.get("/backup-codes/{user_id}/remaining")
async def get_backup_codes_remaining(
	user_id: str,
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Get count of remaining backup codes."""
	return {"remaining": service.remaining_backup_codes(user_id)}


@router.get("/stats", response_model=MFAStatisticsResponse)
async def get_mfa_statistics(
	service: Annotated[MFAService, Depends(get_mfa_service)],
):
	"""Session counts, for diagnostics."""
	return MFAStatisticsResponse(**service.get_statistics())
