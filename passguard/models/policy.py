# passguard/models/policy.py
"""Password policy configuration

A closed, immutable rule set. Updates never mutate a policy in place: a new
instance is built, validated and swapped in by the policy store.
"""
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from passguard.errors import InvalidInputError

# snake_case field -> camelCase wire name
WIRE_NAMES = {
    'min_length': 'minLength',
    'max_length': 'maxLength',
    'require_uppercase': 'requireUppercase',
    'require_lowercase': 'requireLowercase',
    'require_numbers': 'requireNumbers',
    'require_special_chars': 'requireSpecialChars',
    'min_special_chars': 'minSpecialChars',
    'prevent_common_passwords': 'preventCommonPasswords',
    'prevent_user_info': 'preventUserInfo',
    'prevent_reuse': 'preventReuse',
    'max_age_days': 'maxAge',
    'warning_days': 'warningDays',
    'lockout_attempts': 'lockoutAttempts',
    'lockout_duration_minutes': 'lockoutDuration',
}
FIELD_NAMES = {wire: name for name, wire in WIRE_NAMES.items()}

MIN_ALLOWED_LENGTH = 8


@dataclass(frozen=True)
class PolicyConfiguration:
    """Active set of password rules

    lockout_attempts and lockout_duration_minutes are carried for the
    authentication layer and are not enforced by the engine.
    """
    min_length: int = 12
    max_length: int = 128
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = True
    min_special_chars: int = 2
    prevent_common_passwords: bool = True
    prevent_user_info: bool = True
    prevent_reuse: int = 5
    max_age_days: int = 90
    warning_days: int = 14
    lockout_attempts: int = 5
    lockout_duration_minutes: int = 30

    def violations(self) -> List[str]:
        """Return every violated policy invariant, empty when the policy is consistent"""
        errors = []

        if self.min_length > self.max_length:
            errors.append('Minimum length cannot be greater than maximum length')

        if self.min_length < MIN_ALLOWED_LENGTH:
            errors.append(f'Minimum length should be at least {MIN_ALLOWED_LENGTH} characters')

        if self.max_age_days < self.warning_days:
            errors.append('Warning days cannot be greater than password max age')

        if self.min_special_chars > self.min_length:
            errors.append('Minimum special characters cannot exceed minimum length')

        if self.prevent_reuse < 0:
            errors.append('Password reuse window cannot be negative')

        return errors

    def is_consistent(self) -> bool:
        return not self.violations()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase wire names"""
        return {WIRE_NAMES[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  base: Optional['PolicyConfiguration'] = None) -> 'PolicyConfiguration':
        """
        Build a policy from a mapping of snake_case or camelCase keys

        Args:
            data: Field values; keys missing from data are taken from base
            base: Policy supplying unspecified values (defaults when None)

        Returns:
            New PolicyConfiguration (not yet checked against the invariants)

        Raises:
            InvalidInputError: Unknown keys or wrongly typed values
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError('Policy must be a mapping of field names to values')

        types = {f.name: f.type for f in fields(cls)}
        changes = {}
        unknown = []

        for key, value in data.items():
            name = FIELD_NAMES.get(key, key)
            if name not in types:
                unknown.append(key)
                continue

            expected = types[name]
            if expected in (bool, 'bool'):
                if not isinstance(value, bool):
                    raise InvalidInputError(f'Policy field {key} must be a boolean',
                                            details={'field': key})
            elif isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f'Policy field {key} must be an integer',
                                        details={'field': key})
            changes[name] = value

        if unknown:
            raise InvalidInputError('Unknown policy fields: ' + ', '.join(sorted(unknown)),
                                    details={'unknown_fields': sorted(unknown)})

        return replace(base or cls(), **changes)
