# (c) Copyright Datacraft, 2026
"""Storage for MFA sessions."""
from typing import Iterator

from .models import MFASession


class MFASessionStore:
	"""Session-id keyed storage for MFA sessions."""

	def get(self, session_id: str) -> MFASession | None:
		raise NotImplementedError

	def save(self, session: MFASession) -> None:
		raise NotImplementedError

	def delete(self, session_id: str) -> None:
		raise NotImplementedError

	def values(self) -> Iterator[MFASession]:
		raise NotImplementedError

	def __len__(self) -> int:
		raise NotImplementedError


class InMemoryMFASessionStore(MFASessionStore):
	"""Process-local store. In-flight sessions are lost on restart."""

	def __init__(self):
		self._sessions: dict[str, MFASession] = {}

	def get(self, session_id: str) -> MFASession | None:
		return self._sessions.get(session_id)

	def save(self, session: MFASession) -> None:
		self._sessions[session.session_id] = session

	def delete(self, session_id: str) -> None:
		self._sessions.pop(session_id, None)

	def values(self) -> Iterator[MFASession]:
		return iter(list(self._sessions.values()))

	def __len__(self) -> int:
		return len(self._sessions)
