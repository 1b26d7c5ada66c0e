# passguard/models/__init__.py
"""Policy types, validation results and database models"""
from .policy import PolicyConfiguration
from .validation import IdentityInfo, IssueCode, StrengthLabel, ValidationResult
from .records import ExpiryState, ExpiryStatus, HistoryDigest, PasswordRecord, PolicyAuditEntry
from .password_info import PasswordInfo
from .password_history import PasswordHistory
from .policy_record import PolicyRecord
from .policy_audit_log import PolicyAuditLog

__all__ = [
    'PolicyConfiguration', 'IdentityInfo', 'IssueCode', 'StrengthLabel', 'ValidationResult',
    'ExpiryState', 'ExpiryStatus', 'HistoryDigest', 'PasswordRecord', 'PolicyAuditEntry',
    'PasswordInfo', 'PasswordHistory', 'PolicyRecord', 'PolicyAuditLog',
]
