"""
In-memory repository adapter - Implements UserRepository protocol.

The directory lives for the lifetime of the process. Records are keyed by
username; email uniqueness is enforced by a scan inside the same critical
section as the write.

Concurrency Design:
-------------------
A single threading.Lock guards the mapping. insert_if_absent() performs
"username free? email free? write" while holding it, so two concurrent
registrations for the same username cannot both pass their checks. Lookups
take the same lock, which keeps the email scan from iterating a dict that
another thread is resizing.
"""

import logging
import threading

from authcore.domain.ports import InsertResult, UserRecord

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a locked dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, UserRecord] = {}

    def find_by_username(self, username: str) -> UserRecord | None:
        with self._lock:
            return self._users.get(username)

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._lock:
            return self._scan_email(email)

    def insert_if_absent(self, record: UserRecord) -> InsertResult:
        """
        Atomically insert ``record`` if its username and email are unused.

        Args:
            record: Fully built user record

        Returns:
            INSERTED if written, USERNAME_TAKEN or EMAIL_TAKEN otherwise.
            The directory is unchanged on conflict.
        """
        with self._lock:
            if record.username in self._users:
                return InsertResult.USERNAME_TAKEN
            if self._scan_email(record.email) is not None:
                return InsertResult.EMAIL_TAKEN
            self._users[record.username] = record

        logger.debug("Inserted user record: %s", record.username)
        return InsertResult.INSERTED

    def clear(self) -> None:
        """Drop every record (process reset)."""
        with self._lock:
            self._users.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _scan_email(self, email: str) -> UserRecord | None:
        # Caller must hold self._lock.
        for record in self._users.values():
            if record.email == email:
                return record
        return None
