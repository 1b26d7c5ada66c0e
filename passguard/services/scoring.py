# passguard/services/scoring.py
"""Password strength scoring
Deterministic point allocation on a 0-100 scale
"""
from passguard.models.policy import PolicyConfiguration
from passguard.models.validation import StrengthLabel
from passguard.utils.patterns import (
    count_special_chars, has_digit, has_lowercase, has_repeating_pattern,
    has_sequential_chars, has_uppercase,
)

LENGTH_POINTS = 20
CLASS_POINTS = 15
SPECIAL_POINTS = 20
MAX_BONUS = 15
MAX_SCORE = 100

# Inclusive lower bounds, highest first
STRENGTH_THRESHOLDS = (
    (90, StrengthLabel.EXCELLENT),
    (75, StrengthLabel.STRONG),
    (60, StrengthLabel.GOOD),
    (40, StrengthLabel.FAIR),
    (20, StrengthLabel.WEAK),
)


class ScoringEngine:
    """Computes a strength score and label for a password under a policy"""

    def score(self, password: str, policy: PolicyConfiguration) -> int:
        points = 0

        if len(password) >= policy.min_length:
            points += LENGTH_POINTS

        # A present class always earns its points, required or not
        for present in (has_uppercase(password), has_lowercase(password), has_digit(password)):
            if present:
                points += CLASS_POINTS

        if policy.require_special_chars and count_special_chars(password) >= policy.min_special_chars:
            points += SPECIAL_POINTS

        points += self.complexity_bonus(password)
        return max(0, min(points, MAX_SCORE))

    def complexity_bonus(self, password: str) -> int:
        """Entropy-adjacent bonus, capped at 15 points"""
        bonus = 0

        if len(password) >= 16:
            bonus += 10
        if len(password) >= 20:
            bonus += 5

        if password and len(set(password)) >= len(password) * 0.7:
            bonus += 10

        if not has_repeating_pattern(password):
            bonus += 5
        if not has_sequential_chars(password):
            bonus += 5

        return min(bonus, MAX_BONUS)

    @staticmethod
    def label(score: int) -> StrengthLabel:
        for threshold, label in STRENGTH_THRESHOLDS:
            if score >= threshold:
                return label
        return StrengthLabel.VERY_WEAK
