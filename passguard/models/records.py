# passguard/models/records.py
"""In-memory shapes for password history, expiry and the admin audit trail

These are the structures the persistence collaborator must round-trip.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class HistoryDigest:
    """Salted digest of a previously used password"""
    digest: str
    salt: str
    scheme: str
    created_at: datetime
    # PBKDF2 work factor the digest was made with; bcrypt embeds its own cost
    iterations: Optional[int] = None


@dataclass
class PasswordRecord:
    """Per-identity history, most recent entry first"""
    entries: List[HistoryDigest] = field(default_factory=list)
    last_changed_at: Optional[datetime] = None
    change_count: int = 0

    def copy(self) -> 'PasswordRecord':
        return PasswordRecord(list(self.entries), self.last_changed_at, self.change_count)


class ExpiryState(Enum):
    ACTIVE = 'active'
    WARNING = 'warning'
    EXPIRED = 'expired'


@dataclass(frozen=True)
class ExpiryStatus:
    """Age of an identity's password relative to the policy"""
    state: ExpiryState
    days_since_change: int
    days_left: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'state': self.state.value, 'daysSinceChange': self.days_since_change}
        if self.days_left is not None:
            data['daysLeft'] = self.days_left
        return data


@dataclass(frozen=True)
class PolicyAuditEntry:
    """One administrative action on the password policy"""
    timestamp: datetime
    action: str
    admin: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'admin': self.admin,
            'action': self.action,
            'data': self.details,
        }


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the database columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
