"""Tests for the MFA session engine."""
import threading
from datetime import timedelta

import pytest

from access_core.exceptions import InvalidTransitionError, UnsupportedMFAMethodError
from access_core.mfa import MFAConfig, MFAMethod, MFAService, MFAStatus, VerificationStrategy


class _RaisingStrategy(VerificationStrategy):
	def verify(self, code, user_id):
		raise RuntimeError("provider unavailable")


class TestInitiate:

	def test_creates_pending_session(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		session = mfa_service.get_session(session_id)

		assert session.user_id == "user-1"
		assert session.method is MFAMethod.TOTP
		assert session.status is MFAStatus.PENDING
		assert session.attempts == 0
		assert session.max_attempts == 5
		assert session.timestamp == clock.now()
		assert session.expires_at == clock.now() + timedelta(minutes=15)
		assert session.verified_at is None

	def test_session_ids_are_unique(self, mfa_service):
		ids = {mfa_service.initiate_mfa("user-1", "totp") for _ in range(50)}
		assert len(ids) == 50

	@pytest.mark.parametrize("method", ["TOTP", "sms", MFAMethod.EMAIL, "BIOMETRIC"])
	def test_accepts_method_names(self, mfa_service, method):
		session_id = mfa_service.initiate_mfa("user-1", method)
		assert mfa_service.get_session(session_id).method is MFAMethod(method)

	def test_unknown_method_rejected(self, mfa_service):
		with pytest.raises(UnsupportedMFAMethodError):
			mfa_service.initiate_mfa("user-1", "carrier-pigeon")

	def test_method_not_enabled_rejected(self, clock):
		service = MFAService(config=MFAConfig(methods=[MFAMethod.TOTP]), clock=clock)

		with pytest.raises(UnsupportedMFAMethodError) as exc_info:
			service.initiate_mfa("user-1", MFAMethod.SMS)
		assert exc_info.value.method == "sms"
		assert len(service.store) == 0

	def test_method_without_strategy_rejected(self, clock):
		service = MFAService(clock=clock, strategies={})
		with pytest.raises(UnsupportedMFAMethodError):
			service.initiate_mfa("user-1", MFAMethod.TOTP)

	def test_disabled_mfa_rejects_everything(self, clock):
		service = MFAService(config=MFAConfig(enabled=False), clock=clock)
		with pytest.raises(UnsupportedMFAMethodError):
			service.initiate_mfa("user-1", MFAMethod.TOTP)

	def test_unsupported_method_is_value_error(self, mfa_service):
		with pytest.raises(ValueError):
			mfa_service.initiate_mfa("user-1", "voice")


class TestVerify:

	def test_happy_path(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", "TOTP")
		clock.advance(seconds=30)

		assert mfa_service.verify_mfa(session_id, "123456") is True

		session = mfa_service.get_session(session_id)
		assert session.status is MFAStatus.VERIFIED
		assert session.verified_at == clock.now()
		assert session.attempts == 1

	def test_unknown_session(self, mfa_service):
		assert mfa_service.verify_mfa("missing", "123456") is False
		assert len(mfa_service.store) == 0

	def test_wrong_code_consumes_attempt(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)

		assert mfa_service.verify_mfa(session_id, "12345") is False

		session = mfa_service.get_session(session_id)
		assert session.attempts == 1
		assert session.status is MFAStatus.PENDING

	def test_attempt_exhaustion(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)

		for _ in range(5):
			assert mfa_service.verify_mfa(session_id, "abc") is False

		session = mfa_service.get_session(session_id)
		assert session.attempts == 5
		assert session.status is MFAStatus.FAILED

		assert mfa_service.verify_mfa(session_id, "123456") is False
		session = mfa_service.get_session(session_id)
		assert session.attempts == 5
		assert session.status is MFAStatus.FAILED

	def test_last_attempt_is_still_evaluated(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		for _ in range(4):
			mfa_service.verify_mfa(session_id, "nope")

		assert mfa_service.verify_mfa(session_id, "654321") is True
		session = mfa_service.get_session(session_id)
		assert session.attempts == 5
		assert session.status is MFAStatus.VERIFIED

	def test_expired_session(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		clock.advance(minutes=15, seconds=1)

		assert mfa_service.verify_mfa(session_id, "123456") is False

		session = mfa_service.get_session(session_id)
		assert session.status is MFAStatus.EXPIRED
		assert session.attempts == 0

	def test_not_expired_exactly_at_expiry(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		clock.advance(minutes=15)

		assert mfa_service.verify_mfa(session_id, "123456") is True

	def test_no_double_verification(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.SMS)
		assert mfa_service.verify_mfa(session_id, "123456") is True

		assert mfa_service.verify_mfa(session_id, "123456") is False

		session = mfa_service.get_session(session_id)
		assert session.status is MFAStatus.VERIFIED
		assert session.attempts == 1

	def test_verified_session_stays_verified_after_expiry(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.SMS)
		mfa_service.verify_mfa(session_id, "123456")
		clock.advance(hours=1)

		assert mfa_service.verify_mfa(session_id, "123456") is False
		assert mfa_service.get_session(session_id).status is MFAStatus.VERIFIED

	def test_expired_session_is_terminal(self, mfa_service, clock):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.EMAIL)
		clock.advance(hours=1)
		mfa_service.verify_mfa(session_id, "ABCDEFGH")

		clock.set(clock.now() - timedelta(hours=1))
		assert mfa_service.verify_mfa(session_id, "ABCDEFGH") is False
		assert mfa_service.get_session(session_id).status is MFAStatus.EXPIRED

	def test_strategy_error_counts_as_failed_attempt(self, clock):
		strategies = {MFAMethod.TOTP: _RaisingStrategy()}
		service = MFAService(clock=clock, strategies=strategies)
		session_id = service.initiate_mfa("user-1", MFAMethod.TOTP)

		assert service.verify_mfa(session_id, "123456") is False

		session = service.get_session(session_id)
		assert session.attempts == 1
		assert session.status is MFAStatus.PENDING

	def test_custom_max_attempts(self, clock):
		service = MFAService(config=MFAConfig(max_attempts=2), clock=clock)
		session_id = service.initiate_mfa("user-1", MFAMethod.TOTP)

		service.verify_mfa(session_id, "x")
		service.verify_mfa(session_id, "y")

		assert service.get_session(session_id).status is MFAStatus.FAILED

	def test_concurrent_verification_succeeds_once(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		results = []
		lock = threading.Lock()

		def worker():
			ok = mfa_service.verify_mfa(session_id, "123456")
			with lock:
				results.append(ok)

		threads = [threading.Thread(target=worker) for _ in range(10)]
		for t in threads:
			t.start()
		for t in threads:
			t.join()

		assert results.count(True) == 1
		assert mfa_service.get_session(session_id).attempts == 1


class TestTransitions:

	def test_terminal_state_cannot_change(self, mfa_service):
		session_id = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		session = mfa_service.get_session(session_id)
		session.transition(MFAStatus.FAILED)

		with pytest.raises(InvalidTransitionError):
			session.transition(MFAStatus.VERIFIED)

	def test_cannot_return_to_pending(self, mfa_service):
		session = mfa_service.get_session(mfa_service.initiate_mfa("user-1", MFAMethod.TOTP))
		with pytest.raises(InvalidTransitionError):
			session.transition(MFAStatus.PENDING)


class TestStatisticsAndCleanup:

	def test_statistics(self, mfa_service, clock):
		verified = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		mfa_service.verify_mfa(verified, "123456")

		failed = mfa_service.initiate_mfa("user-2", MFAMethod.SMS)
		for _ in range(5):
			mfa_service.verify_mfa(failed, "bad")

		mfa_service.initiate_mfa("user-3", MFAMethod.TOTP)

		stats = mfa_service.get_statistics()
		assert stats == {
			"total_sessions": 3,
			"verified": 1,
			"failed": 1,
			"expired": 0,
			"pending": 1,
			"by_method": {"totp": 2, "sms": 1},
		}

	def test_cleanup_removes_expired_sessions(self, mfa_service, clock):
		old = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)
		clock.advance(minutes=10)
		fresh = mfa_service.initiate_mfa("user-2", MFAMethod.TOTP)
		clock.advance(minutes=6)

		assert mfa_service.cleanup() == 1
		assert mfa_service.get_session(old) is None
		assert mfa_service.get_session(fresh) is not None
		assert mfa_service.verify_mfa(old, "123456") is False


class TestConfig:

	def test_update_config_applies_to_new_sessions(self, mfa_service):
		before = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)

		mfa_service.update_config(max_attempts=3, session_duration_seconds=60)
		after = mfa_service.initiate_mfa("user-1", MFAMethod.TOTP)

		assert mfa_service.get_session(before).max_attempts == 5
		assert mfa_service.get_session(after).max_attempts == 3
		assert mfa_service.get_config().session_duration_seconds == 60

	def test_get_config_returns_copy(self, mfa_service):
		config = mfa_service.get_config()
		config.max_attempts = 99
		assert mfa_service.get_config().max_attempts == 5
