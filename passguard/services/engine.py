# passguard/services/engine.py
"""Password engine facade
Single entry point for the authentication flow and the policy admin surface
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger

from passguard.errors import InvalidInputError
from passguard.logging_config import audit_log
from passguard.models.policy import PolicyConfiguration
from passguard.models.records import ExpiryStatus, PolicyAuditEntry, utcnow
from passguard.models.validation import IdentityInfo, ValidationResult
from passguard.services.generator import DEFAULT_LENGTH, DEFAULT_MAX_ATTEMPTS, PasswordGenerator
from passguard.services.history import HistoryTracker
from passguard.services.persistence import InMemoryPersistence, PersistenceCollaborator
from passguard.services.policy_store import PolicyStore
from passguard.services.validator import PasswordValidator
from passguard.utils.security import DigestHasher

EXPORT_VERSION = '1.0'
DEFAULT_AUDIT_LIMIT = 100
READ_ONLY_ACTIONS = ('password_policy_exported',)

PolicyInput = Union[PolicyConfiguration, Mapping[str, Any]]
IdentityInput = Union[IdentityInfo, Mapping[str, Any], None]


def compliance_level(policy: PolicyConfiguration) -> int:
    """Rough 0-100 rating of how demanding a policy is"""
    score = 0

    if policy.min_length >= 12:
        score += 20
    elif policy.min_length >= 8:
        score += 10

    for required in (policy.require_uppercase, policy.require_lowercase,
                     policy.require_numbers, policy.require_special_chars):
        if required:
            score += 15

    if policy.prevent_common_passwords:
        score += 10
    if policy.prevent_user_info:
        score += 5
    if policy.prevent_reuse > 0:
        score += 5

    return min(score, 100)


class PasswordEngine:
    """
    Wires the policy store, validator, history tracker and generator together

    The engine owns its policy store; callers change the policy only through
    set_policy/reset_policy/import_policy, which validate before swapping.
    """

    def __init__(self, persistence: Optional[PersistenceCollaborator] = None,
                 default_policy: Optional[PolicyConfiguration] = None,
                 hasher: Optional[DigestHasher] = None,
                 generator_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 default_length: int = DEFAULT_LENGTH,
                 audit_limit: int = DEFAULT_AUDIT_LIMIT):
        self.persistence = persistence or InMemoryPersistence()
        self.policies = PolicyStore(default_policy, self.persistence)
        self.validator = PasswordValidator()
        self.history = HistoryTracker(self.persistence, hasher)
        self.generator = PasswordGenerator(self.validator, generator_max_attempts)
        self.default_length = default_length
        self.audit_limit = audit_limit

    @classmethod
    def from_config(cls, app_config: Mapping[str, Any],
                    persistence: Optional[PersistenceCollaborator] = None) -> 'PasswordEngine':
        """Build an engine from a Flask config mapping"""
        hasher = DigestHasher(
            scheme=app_config.get('HISTORY_HASH_SCHEME', 'pbkdf2'),
            iterations=app_config.get('PBKDF2_ITERATIONS', 600000),
            rounds=app_config.get('BCRYPT_ROUNDS', 12),
        )
        default_policy = PolicyConfiguration.from_dict(app_config.get('PASSWORD_POLICY_DEFAULTS', {}))
        return cls(
            persistence=persistence,
            default_policy=default_policy,
            hasher=hasher,
            generator_max_attempts=app_config.get('GENERATOR_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS),
            default_length=app_config.get('GENERATOR_DEFAULT_LENGTH', DEFAULT_LENGTH),
            audit_limit=app_config.get('POLICY_AUDIT_LIMIT', DEFAULT_AUDIT_LIMIT),
        )

    def load(self) -> PolicyConfiguration:
        """Activate the persisted policy, if any"""
        return self.policies.load()

    # Authentication flow

    def validate_password(self, password: str, identity: IdentityInput = None) -> ValidationResult:
        return self.validator.validate(password, self._identity(identity),
                                       self.policies.get(), self.history)

    def generate_password(self, length: Optional[int] = None) -> str:
        """Generate a compliant password; the default length is clamped to the policy bounds"""
        policy = self.policies.get()
        if length is None:
            length = min(max(self.default_length, policy.min_length), policy.max_length)
        return self.generator.generate(policy, length)

    def record_password_change(self, identity: IdentityInput, password: str,
                               now: Optional[datetime] = None):
        return self.history.record_change(self._history_key(identity), password,
                                          self.policies.get(), now)

    def initialize_identity(self, identity: IdentityInput, now: Optional[datetime] = None):
        return self.history.initialize(self._history_key(identity), now)

    def get_expiry_status(self, identity: IdentityInput,
                          now: Optional[datetime] = None) -> Optional[ExpiryStatus]:
        return self.history.expiry_status(self._history_key(identity), self.policies.get(), now)

    # Policy administration

    def get_policy(self) -> PolicyConfiguration:
        return self.policies.get()

    def set_policy(self, candidate: PolicyInput, admin: Optional[str] = None) -> PolicyConfiguration:
        """
        Replace the active policy

        A mapping may be partial: unspecified fields keep their current values,
        and the merged result is validated as a whole before it is activated.
        """
        policy = self._policy(candidate)
        self.policies.set(policy)
        self._audit('password_policy_updated', admin, policy.to_dict())
        return policy

    def reset_policy(self, admin: Optional[str] = None) -> PolicyConfiguration:
        policy = self.policies.reset_to_default()
        self._audit('password_policy_reset', admin)
        return policy

    def export_policy(self, admin: Optional[str] = None) -> Dict[str, Any]:
        document = {
            'policies': self.policies.get().to_dict(),
            'exportDate': utcnow().isoformat(),
            'exportedBy': admin,
            'version': EXPORT_VERSION,
        }
        self._audit('password_policy_exported', admin)
        return document

    def import_policy(self, document: Mapping[str, Any], admin: Optional[str] = None,
                      source: Optional[str] = None) -> PolicyConfiguration:
        """Validate and apply the policies of an exported document"""
        if not isinstance(document, Mapping) or not isinstance(document.get('policies'), Mapping):
            raise InvalidInputError('Import document must contain a "policies" object')

        policy = PolicyConfiguration.from_dict(document['policies'], base=self.policies.default)
        self.policies.set(policy)
        self._audit('password_policy_imported', admin, {'source': source} if source else {})
        return policy

    def policy_statistics(self) -> Dict[str, Any]:
        return {
            'totalPolicyChanges': len(self.persistence.load_audit()),
            'currentPolicyVersion': EXPORT_VERSION,
            'lastModified': self._last_modified(),
            'complianceLevel': compliance_level(self.policies.get()),
        }

    def audit_trail(self) -> List[PolicyAuditEntry]:
        return self.persistence.load_audit()

    def _last_modified(self) -> Optional[str]:
        """Timestamp of the newest audited change; exports do not count"""
        for entry in reversed(self.persistence.load_audit()):
            if entry.action not in READ_ONLY_ACTIONS:
                return entry.timestamp.isoformat()
        return None

    # Helpers

    def _audit(self, action: str, admin: Optional[str], details: Optional[Dict[str, Any]] = None):
        entry = PolicyAuditEntry(timestamp=utcnow(), action=action, admin=admin,
                                 details=details or {})
        self.persistence.append_audit(entry, self.audit_limit)
        audit_log(f"{action} by {admin or 'unknown'}")

    def _policy(self, candidate: PolicyInput) -> PolicyConfiguration:
        if isinstance(candidate, PolicyConfiguration):
            return candidate
        return PolicyConfiguration.from_dict(candidate, base=self.policies.get())

    @staticmethod
    def _identity(identity: IdentityInput) -> IdentityInfo:
        if isinstance(identity, IdentityInfo):
            return identity
        return IdentityInfo.from_dict(identity)

    def _history_key(self, identity: IdentityInput) -> str:
        if isinstance(identity, str):
            return identity
        key = self._identity(identity).history_key
        if not key:
            logger.warning("History operation without an identity key")
            raise InvalidInputError('Identity requires a user_id or username')
        return key
