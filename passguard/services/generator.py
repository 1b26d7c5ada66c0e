# passguard/services/generator.py
"""Policy-compliant password generation
Uses cryptographically secure randomness (secrets)
"""
import secrets
import string
from typing import List, Optional

from loguru import logger

from passguard.errors import GenerationError, InvalidInputError
from passguard.models.policy import PolicyConfiguration
from passguard.models.validation import IdentityInfo
from passguard.services.scoring import CLASS_POINTS, LENGTH_POINTS, MAX_BONUS, SPECIAL_POINTS
from passguard.services.validator import MIN_VALID_SCORE, PasswordValidator
from passguard.utils.patterns import SPECIAL_CHARS

DEFAULT_LENGTH = 16
DEFAULT_MAX_ATTEMPTS = 100


def class_alphabets(policy: PolicyConfiguration) -> List[str]:
    """Scored character classes, the ones the policy requires first"""
    classes = (
        (policy.require_uppercase, string.ascii_uppercase),
        (policy.require_lowercase, string.ascii_lowercase),
        (policy.require_numbers, string.digits),
    )
    return ([alphabet for required, alphabet in classes if required] +
            [alphabet for required, alphabet in classes if not required])


def required_class_count(policy: PolicyConfiguration) -> int:
    return sum((policy.require_uppercase, policy.require_lowercase, policy.require_numbers))


class PasswordGenerator:
    """Generates random passwords that pass validation under a policy"""

    def __init__(self, validator: Optional[PasswordValidator] = None,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.validator = validator or PasswordValidator()
        self.max_attempts = max_attempts
        self._random = secrets.SystemRandom()

    def generate(self, policy: PolicyConfiguration, length: int = DEFAULT_LENGTH) -> str:
        """
        Generate a password satisfying the policy

        One character of every required class and min_special_chars specials
        are placed first. Optional classes fill the remaining reserved slots,
        since each present class adds to the score.

        Args:
            policy: Policy the password must satisfy
            length: Exact password length, within [min_length, max_length]

        Returns:
            Generated password

        Raises:
            InvalidInputError: length is outside the policy bounds, or no
                password of this length can satisfy the policy
            GenerationError: no compliant candidate within max_attempts
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise InvalidInputError('Password length must be an integer')
        if length < policy.min_length:
            raise InvalidInputError(
                f'Requested length {length} is below the policy minimum of {policy.min_length}')
        if length > policy.max_length:
            raise InvalidInputError(
                f'Requested length {length} exceeds the policy maximum of {policy.max_length}')

        special_count = policy.min_special_chars if policy.require_special_chars else 0
        required_count = required_class_count(policy) + special_count
        if required_count > length:
            raise InvalidInputError(
                f'Length {length} cannot hold the {required_count} required characters')

        alphabets = class_alphabets(policy)[:length - special_count]
        best_score = (LENGTH_POINTS + CLASS_POINTS * len(alphabets) + MAX_BONUS +
                      (SPECIAL_POINTS if policy.require_special_chars else 0))
        if best_score < MIN_VALID_SCORE:
            raise InvalidInputError(
                f'Length {length} leaves no room for the character classes needed '
                f'to reach a score of {MIN_VALID_SCORE}')

        for attempt in range(1, self.max_attempts + 1):
            candidate = self._candidate(length, alphabets, special_count,
                                        policy.require_special_chars)
            result = self.validator.validate(candidate, IdentityInfo(), policy)
            if result.is_valid:
                logger.debug(f"Generated compliant password on attempt {attempt}")
                return candidate

        logger.error(f"No compliant password after {self.max_attempts} attempts")
        raise GenerationError(f'Could not generate a compliant password in {self.max_attempts} attempts')

    def _candidate(self, length: int, alphabets: List[str], special_count: int,
                   use_specials: bool) -> str:
        # guaranteed characters
        chars = [secrets.choice(alphabet) for alphabet in alphabets]
        chars += [secrets.choice(SPECIAL_CHARS) for _ in range(special_count)]

        # fill the rest
        pool = ''.join(alphabets) + (SPECIAL_CHARS if use_specials else '')
        chars += [secrets.choice(pool) for _ in range(length - len(chars))]

        self._random.shuffle(chars)
        return ''.join(chars)
