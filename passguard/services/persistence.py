# passguard/services/persistence.py
"""Persistence collaborators for policy, password history and the audit trail

The engine only depends on PersistenceCollaborator. Failures surface as
PersistenceError; the engine never retries them itself.
"""
import threading
from abc import ABC, abstractmethod
from functools import wraps
from typing import Dict, List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from passguard.errors import InvalidInputError, PersistenceError
from passguard.extensions import db
from passguard.models.password_history import PasswordHistory
from passguard.models.password_info import PasswordInfo
from passguard.models.policy import PolicyConfiguration
from passguard.models.policy_audit_log import PolicyAuditLog
from passguard.models.policy_record import PolicyRecord
from passguard.models.records import HistoryDigest, PasswordRecord, PolicyAuditEntry


class PersistenceCollaborator(ABC):
    """Storage contract consumed by the engine"""

    @abstractmethod
    def load_policy(self) -> Optional[PolicyConfiguration]:
        """Return the stored policy, or None when nothing was saved yet"""

    @abstractmethod
    def save_policy(self, policy: PolicyConfiguration) -> None:
        ...

    @abstractmethod
    def load_history(self, identity: str) -> Optional[PasswordRecord]:
        """Return the identity's record, or None for an unknown identity"""

    @abstractmethod
    def save_history(self, identity: str, record: PasswordRecord) -> None:
        ...

    @abstractmethod
    def append_audit(self, entry: PolicyAuditEntry, keep: int) -> None:
        """Store an audit entry, retaining only the newest `keep` entries"""

    @abstractmethod
    def load_audit(self) -> List[PolicyAuditEntry]:
        """Audit entries, oldest first"""


class InMemoryPersistence(PersistenceCollaborator):
    """Dict-backed collaborator for tests and single-process use"""

    def __init__(self):
        self._lock = threading.Lock()
        self._policy: Optional[PolicyConfiguration] = None
        self._history: Dict[str, PasswordRecord] = {}
        self._audit: List[PolicyAuditEntry] = []

    def load_policy(self):
        return self._policy

    def save_policy(self, policy):
        self._policy = policy

    def load_history(self, identity):
        with self._lock:
            record = self._history.get(identity)
            return record.copy() if record else None

    def save_history(self, identity, record):
        with self._lock:
            self._history[identity] = record.copy()

    def append_audit(self, entry, keep):
        with self._lock:
            self._audit.append(entry)
            if len(self._audit) > keep:
                del self._audit[:len(self._audit) - keep]

    def load_audit(self):
        with self._lock:
            return list(self._audit)


def _database_operation(f):
    """Roll back and re-raise database failures as PersistenceError"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Persistence operation {f.__name__} failed: {e.__class__.__name__}")
            raise PersistenceError(f'Database operation {f.__name__} failed',
                                   details={'reason': str(e)}) from e
    return decorated_function


class SQLAlchemyPersistence(PersistenceCollaborator):
    """Flask-SQLAlchemy binding; must be used inside an application context"""

    @_database_operation
    def load_policy(self):
        record = db.session.get(PolicyRecord, 1)
        if record is None:
            return None
        try:
            return PolicyConfiguration.from_dict(record.policy)
        except InvalidInputError as e:
            raise PersistenceError('Stored policy is malformed', details={'reason': e.message}) from e

    @_database_operation
    def save_policy(self, policy):
        record = db.session.get(PolicyRecord, 1)
        if record is None:
            record = PolicyRecord(id=1, policy=policy.to_dict())
            db.session.add(record)
        else:
            record.policy = policy.to_dict()
        db.session.commit()

    @_database_operation
    def load_history(self, identity):
        info = db.session.get(PasswordInfo, identity)
        if info is None:
            return None
        entries = [
            HistoryDigest(digest=h.password_hash, salt=h.salt, scheme=h.scheme,
                          created_at=h.created_at, iterations=h.iterations)
            for h in sorted(info.history, key=lambda h: h.position)
        ]
        return PasswordRecord(entries=entries, last_changed_at=info.last_changed_at,
                              change_count=info.change_count)

    @_database_operation
    def save_history(self, identity, record):
        info = db.session.get(PasswordInfo, identity)
        if info is None:
            info = PasswordInfo(identity=identity)
            db.session.add(info)

        info.last_changed_at = record.last_changed_at
        info.change_count = record.change_count

        # Superseded wholesale: the record is the source of truth for ordering
        info.history.clear()
        for position, entry in enumerate(record.entries):
            info.history.append(PasswordHistory(
                identity=identity,
                position=position,
                password_hash=entry.digest,
                salt=entry.salt,
                scheme=entry.scheme,
                created_at=entry.created_at,
                iterations=entry.iterations,
            ))
        db.session.commit()

    @_database_operation
    def append_audit(self, entry, keep):
        db.session.add(PolicyAuditLog(
            admin=entry.admin,
            action=entry.action,
            details=entry.details,
            timestamp=entry.timestamp,
        ))
        db.session.flush()
        PolicyAuditLog.trim(keep)
        db.session.commit()

    @_database_operation
    def load_audit(self):
        rows = PolicyAuditLog.query.order_by(PolicyAuditLog.timestamp, PolicyAuditLog.id).all()
        return [
            PolicyAuditEntry(timestamp=row.timestamp, action=row.action, admin=row.admin,
                             details=row.details or {})
            for row in rows
        ]
