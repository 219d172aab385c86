# (c) Copyright Datacraft, 2026
import logging

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # MFA settings
    mfa_enabled: bool = True
    mfa_methods: list[str] = Field(
        default=["totp", "sms", "email", "biometric"],
        description="MFA methods users may initiate a session with",
    )
    mfa_session_duration_seconds: int = Field(gt=0, default=15 * 60)
    mfa_max_attempts: int = Field(gt=0, default=5)
    mfa_backup_codes_count: int = Field(gt=0, default=10, description="Number of backup codes to generate")
    mfa_required_for_admin: bool = True
    mfa_required_for_sensitive_ops: bool = True

    # Rate limiting / cleanup
    cleanup_interval_seconds: float = Field(gt=0, default=5 * 60, description="Interval between expiry sweeps")
    rate_limit_warn_remaining: int = Field(ge=0, default=2, description="Log when remaining requests drop to this")

    model_config = SettingsConfigDict(env_prefix='ac_')


@lru_cache()
def get_settings():
    return Settings()
