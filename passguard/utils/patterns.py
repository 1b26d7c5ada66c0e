# passguard/utils/patterns.py
"""Weak-pattern detection
Stateless checks shared by the validator and the scoring engine
"""
from typing import Iterable, Optional

from passguard.models.validation import IdentityInfo

SPECIAL_CHARS = '!@#$%^&*()_+-=[]{}|;:,.<>?'

SEQUENCES = ('abc', '123', 'qwe', 'asd', 'zxc')

# Curated list; matched by containment in both directions
COMMON_PASSWORDS = (
    'password', '123456', '123456789', 'qwerty', 'abc123',
    'password123', 'admin', 'letmein', 'welcome', 'monkey',
    'dragon', 'master', 'shadow', 'superman', 'michael',
    'football', 'baseball', 'liverpool', 'jordan', 'harley',
)

PATTERN_WINDOW = 3


def has_repeating_pattern(password: str) -> bool:
    """
    Detect a 3-character substring that occurs again later in the password

    Args:
        password: Candidate password

    Returns:
        True if any window of length 3 recurs at a later offset
    """
    for i in range(len(password) - PATTERN_WINDOW + 1):
        if password.find(password[i:i + PATTERN_WINDOW], i + 1) != -1:
            return True
    return False


def has_sequential_chars(password: str) -> bool:
    """True if the password contains a keyboard/alpha/numeric run or its reverse"""
    lowered = password.lower()
    return any(seq in lowered or seq[::-1] in lowered for seq in SEQUENCES)


def is_common_password(password: str, dictionary: Iterable[str] = COMMON_PASSWORDS) -> bool:
    """
    Check the password against a common-password list

    Containment is checked both ways, so "password123!" and "footb" both match.

    Args:
        password: Candidate password
        dictionary: Lower-case common passwords

    Returns:
        True if the password contains, or is contained by, any entry
    """
    lowered = password.lower()
    return any(common in lowered or lowered in common for common in dictionary)


def contains_user_info(password: str, identity: Optional[IdentityInfo]) -> bool:
    """True if the password contains, or is contained by, any non-empty identity field"""
    if identity is None:
        return False

    lowered = password.lower()
    for value in identity.personal_values():
        value = value.lower()
        if value in lowered or lowered in value:
            return True
    return False


def count_special_chars(password: str) -> int:
    """Number of characters drawn from SPECIAL_CHARS"""
    return sum(1 for char in password if char in SPECIAL_CHARS)


def has_uppercase(password: str) -> bool:
    return any('A' <= char <= 'Z' for char in password)


def has_lowercase(password: str) -> bool:
    return any('a' <= char <= 'z' for char in password)


def has_digit(password: str) -> bool:
    return any('0' <= char <= '9' for char in password)
