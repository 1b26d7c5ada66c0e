# passguard/services/history.py
"""Password history tracking
Reuse window, last-change timestamp and expiry state per identity
"""
import threading
from collections import defaultdict
from datetime import datetime
from typing import Dict, Optional

from loguru import logger

from passguard.errors import InvalidInputError
from passguard.models.policy import PolicyConfiguration
from passguard.models.records import (
    ExpiryState, ExpiryStatus, HistoryDigest, PasswordRecord, utcnow,
)
from passguard.services.persistence import InMemoryPersistence, PersistenceCollaborator
from passguard.utils.security import DigestHasher


class HistoryTracker:
    """
    Owns every identity's password history

    Records live in the persistence collaborator; this class only holds a lock
    per identity so concurrent changes to one identity are serialised while
    different identities proceed independently.
    """

    def __init__(self, persistence: Optional[PersistenceCollaborator] = None,
                 hasher: Optional[DigestHasher] = None):
        self.persistence = persistence or InMemoryPersistence()
        self.hasher = hasher or DigestHasher()
        self._registry_lock = threading.Lock()
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)

    def _lock_for(self, identity: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks[identity]

    @staticmethod
    def _check_identity(identity) -> str:
        if not isinstance(identity, str) or not identity:
            raise InvalidInputError('Identity key must be a non-empty string')
        return identity

    def record_change(self, identity: str, password: str, policy: PolicyConfiguration,
                      now: Optional[datetime] = None) -> PasswordRecord:
        """
        Record a new password for an identity

        Args:
            identity: History key of the identity
            password: The new password (only its digest is kept)
            policy: Active policy; prevent_reuse bounds the history length
            now: Change timestamp, defaults to the current UTC time

        Returns:
            The updated record
        """
        self._check_identity(identity)
        if not isinstance(password, str):
            raise InvalidInputError('Password must be a string')

        now = now or utcnow()
        digest, salt, iterations = self.hasher.digest(password)

        with self._lock_for(identity):
            record = self.persistence.load_history(identity) or PasswordRecord()
            record.entries.insert(0, HistoryDigest(digest=digest, salt=salt, scheme=self.hasher.scheme,
                                                   created_at=now, iterations=iterations))
            del record.entries[policy.prevent_reuse:]
            record.last_changed_at = now
            record.change_count += 1
            self.persistence.save_history(identity, record)

        logger.info(f"Password change recorded for {identity} (change #{record.change_count})")
        return record

    def is_reused(self, identity: str, password: str, window: Optional[int] = None) -> bool:
        """True if the password matches any digest in the identity's history

        window limits the check to the most recent entries, for a policy whose
        reuse window shrank after the history was written.
        """
        record = self.persistence.load_history(self._check_identity(identity))
        if record is None:
            return False
        entries = record.entries if window is None else record.entries[:window]
        # Check every entry so the comparison cost does not reveal the match position
        matched = False
        for entry in entries:
            if self.hasher.matches(password, entry.digest, entry.salt, entry.scheme,
                                   entry.iterations):
                matched = True
        return matched

    def has_history(self, identity: str) -> bool:
        record = self.persistence.load_history(self._check_identity(identity))
        return record is not None and bool(record.entries)

    def password_info(self, identity: str) -> Optional[PasswordRecord]:
        """Snapshot of the identity's record, or None when unknown"""
        return self.persistence.load_history(self._check_identity(identity))

    def initialize(self, identity: str, now: Optional[datetime] = None) -> PasswordRecord:
        """Start the expiry clock for an identity that has no record yet"""
        self._check_identity(identity)
        with self._lock_for(identity):
            record = self.persistence.load_history(identity)
            if record is None:
                record = PasswordRecord(last_changed_at=now or utcnow(), change_count=1)
                self.persistence.save_history(identity, record)
        return record

    def expiry_status(self, identity: str, policy: PolicyConfiguration,
                      now: Optional[datetime] = None) -> Optional[ExpiryStatus]:
        """
        Compute the identity's expiry state

        Returns:
            ExpiryStatus, or None when the identity has never changed a password
        """
        record = self.persistence.load_history(self._check_identity(identity))
        if record is None or record.last_changed_at is None:
            return None
        return compute_expiry(record.last_changed_at, policy, now or utcnow())


def compute_expiry(last_changed_at: datetime, policy: PolicyConfiguration,
                   now: datetime) -> ExpiryStatus:
    """Active -> Warning -> Expired as whole days pass since the last change"""
    days_since = (now - last_changed_at).days

    if days_since >= policy.max_age_days:
        return ExpiryStatus(ExpiryState.EXPIRED, days_since)
    if days_since >= policy.max_age_days - policy.warning_days:
        return ExpiryStatus(ExpiryState.WARNING, days_since,
                            days_left=policy.max_age_days - days_since)
    return ExpiryStatus(ExpiryState.ACTIVE, days_since)
