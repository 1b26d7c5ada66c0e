# passguard/services/validator.py
"""Password validation
Runs every policy rule, scores the password and produces a single verdict
"""
from typing import Optional

from loguru import logger

from passguard.errors import InvalidInputError
from passguard.models.policy import PolicyConfiguration
from passguard.models.validation import IdentityInfo, IssueCode, ValidationResult
from passguard.services.history import HistoryTracker
from passguard.services.scoring import ScoringEngine
from passguard.services.suggestions import SuggestionEngine
from passguard.utils.patterns import (
    contains_user_info, count_special_chars, has_digit, has_lowercase,
    has_uppercase, is_common_password,
)

MIN_VALID_SCORE = 60


class PasswordValidator:
    """Orchestrates rule checks, scoring, reuse detection and suggestions"""

    def __init__(self, scoring: Optional[ScoringEngine] = None,
                 suggestions: Optional[SuggestionEngine] = None):
        self.scoring = scoring or ScoringEngine()
        self.suggestions = suggestions or SuggestionEngine()

    def validate(self, password: str, identity: Optional[IdentityInfo],
                 policy: PolicyConfiguration,
                 history: Optional[HistoryTracker] = None) -> ValidationResult:
        """
        Check a candidate password against the policy

        All rules run, so the result lists every violation at once.

        Args:
            password: Candidate password
            identity: Identity metadata for personal-info and reuse checks
            policy: Policy to enforce
            history: History tracker for the reuse check; skipped when None

        Returns:
            ValidationResult with issues in detection order

        Raises:
            InvalidInputError: password is not a string
        """
        if not isinstance(password, str):
            raise InvalidInputError('Password must be a string')
        identity = identity or IdentityInfo()

        issues = []

        if len(password) < policy.min_length:
            issues.append(IssueCode.TOO_SHORT)
        if len(password) > policy.max_length:
            issues.append(IssueCode.TOO_LONG)

        if policy.require_uppercase and not has_uppercase(password):
            issues.append(IssueCode.MISSING_UPPERCASE)
        if policy.require_lowercase and not has_lowercase(password):
            issues.append(IssueCode.MISSING_LOWERCASE)
        if policy.require_numbers and not has_digit(password):
            issues.append(IssueCode.MISSING_NUMBER)

        if policy.require_special_chars and count_special_chars(password) < policy.min_special_chars:
            issues.append(IssueCode.INSUFFICIENT_SPECIAL_CHARS)

        if policy.prevent_common_passwords and is_common_password(password):
            issues.append(IssueCode.COMMON_PASSWORD)

        if policy.prevent_user_info and contains_user_info(password, identity):
            issues.append(IssueCode.CONTAINS_PERSONAL_INFO)

        if self._is_reused(password, identity, policy, history):
            issues.append(IssueCode.PASSWORD_REUSED)

        score = self.scoring.score(password, policy)
        result = ValidationResult(
            is_valid=not issues and score >= MIN_VALID_SCORE,
            score=score,
            strength=self.scoring.label(score),
            issues=issues,
            suggestions=self.suggestions.suggest(issues, policy),
            messages=[issue.describe(policy) for issue in issues],
        )

        logger.debug(
            f"Password validated: valid={result.is_valid} score={score} "
            f"issues={[issue.value for issue in issues]}"
        )
        return result

    @staticmethod
    def _is_reused(password, identity, policy, history) -> bool:
        if history is None or policy.prevent_reuse <= 0:
            return False
        key = identity.history_key
        if not key or not history.has_history(key):
            return False
        return history.is_reused(key, password, window=policy.prevent_reuse)
