# passguard/models/validation.py
"""Validation verdict types"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from passguard.errors import InvalidInputError
from passguard.models.policy import PolicyConfiguration


class StrengthLabel(Enum):
    """Qualitative strength bucket derived from the score"""
    VERY_WEAK = 'Very Weak'
    WEAK = 'Weak'
    FAIR = 'Fair'
    GOOD = 'Good'
    STRONG = 'Strong'
    EXCELLENT = 'Excellent'


class IssueCode(Enum):
    """Reason a password failed a specific rule"""
    TOO_SHORT = 'too_short'
    TOO_LONG = 'too_long'
    MISSING_UPPERCASE = 'missing_uppercase'
    MISSING_LOWERCASE = 'missing_lowercase'
    MISSING_NUMBER = 'missing_number'
    INSUFFICIENT_SPECIAL_CHARS = 'insufficient_special_chars'
    COMMON_PASSWORD = 'common_password'
    CONTAINS_PERSONAL_INFO = 'contains_personal_info'
    PASSWORD_REUSED = 'password_reused'

    def describe(self, policy: PolicyConfiguration) -> str:
        """Human-readable message for this issue under the given policy"""
        messages = {
            IssueCode.TOO_SHORT: f'Password must be at least {policy.min_length} characters long',
            IssueCode.TOO_LONG: f'Password must not exceed {policy.max_length} characters',
            IssueCode.MISSING_UPPERCASE: 'Password must contain at least one uppercase letter',
            IssueCode.MISSING_LOWERCASE: 'Password must contain at least one lowercase letter',
            IssueCode.MISSING_NUMBER: 'Password must contain at least one number',
            IssueCode.INSUFFICIENT_SPECIAL_CHARS:
                f'Password must contain at least {policy.min_special_chars} special characters',
            IssueCode.COMMON_PASSWORD: 'Password is too common. Please choose a more unique password',
            IssueCode.CONTAINS_PERSONAL_INFO: 'Password should not contain personal information',
            IssueCode.PASSWORD_REUSED:
                f'Password cannot be one of your last {policy.prevent_reuse} passwords',
        }
        return messages[self]


# identity field -> accepted input keys
_IDENTITY_KEYS = {
    'first_name': ('first_name', 'firstName'),
    'last_name': ('last_name', 'lastName'),
    'email': ('email',),
    'username': ('username',),
    'user_id': ('user_id', 'userId'),
}


@dataclass(frozen=True)
class IdentityInfo:
    """Caller-supplied identity metadata; never persisted by the engine

    user_id keys the password history. The other fields only feed the
    personal-information check.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    user_id: Optional[str] = None

    def personal_values(self) -> List[str]:
        """Non-empty fields used by the personal-information check"""
        values = [self.first_name, self.last_name, self.email, self.username]
        return [v for v in values if v]

    @property
    def history_key(self) -> Optional[str]:
        return self.user_id or self.username

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'IdentityInfo':
        """Build from a mapping with snake_case or camelCase keys"""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidInputError('Identity must be a mapping')

        lookup = {key: name for name, keys in _IDENTITY_KEYS.items() for key in keys}
        unknown = sorted(key for key in data if key not in lookup)
        if unknown:
            raise InvalidInputError('Unknown identity fields: ' + ', '.join(unknown))

        values = {}
        for key, value in data.items():
            if value is not None and not isinstance(value, (str, int)):
                raise InvalidInputError(f'Identity field {key} must be a string')
            values[lookup[key]] = str(value) if value is not None else None
        return cls(**values)


@dataclass
class ValidationResult:
    """Verdict for a single candidate password"""
    is_valid: bool
    score: int
    strength: StrengthLabel
    issues: List[IssueCode] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isValid': self.is_valid,
            'score': self.score,
            'strength': self.strength.value,
            'issues': [issue.value for issue in self.issues],
            'messages': list(self.messages),
            'suggestions': list(self.suggestions),
        }
