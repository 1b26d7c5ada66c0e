# passguard/services/suggestions.py
"""Remediation text for failed password rules"""
from typing import List, Sequence

from passguard.models.policy import PolicyConfiguration
from passguard.models.validation import IssueCode
from passguard.utils.patterns import SPECIAL_CHARS


class SuggestionEngine:
    """Maps issue codes to ordered, human-readable suggestions"""

    def suggest(self, issues: Sequence[IssueCode], policy: PolicyConfiguration) -> List[str]:
        suggestions = []
        for issue in issues:
            suggestions.extend(self._for_issue(issue, policy))
        return suggestions

    def _for_issue(self, issue: IssueCode, policy: PolicyConfiguration) -> List[str]:
        if issue is IssueCode.TOO_SHORT:
            return [
                'Try using a passphrase with multiple words',
                'Add more characters to meet minimum length requirement',
            ]
        if issue is IssueCode.TOO_LONG:
            return [f'Shorten your password to at most {policy.max_length} characters']
        if issue is IssueCode.MISSING_UPPERCASE:
            return ['Add at least one uppercase letter (A-Z)']
        if issue is IssueCode.MISSING_LOWERCASE:
            return ['Add at least one lowercase letter (a-z)']
        if issue is IssueCode.MISSING_NUMBER:
            return ['Include at least one number (0-9)']
        if issue is IssueCode.INSUFFICIENT_SPECIAL_CHARS:
            return [f'Add special characters like: {SPECIAL_CHARS[:10]}...']
        if issue is IssueCode.COMMON_PASSWORD:
            return [
                'Avoid common passwords and dictionary words',
                'Create a unique combination of words and characters',
            ]
        if issue is IssueCode.CONTAINS_PERSONAL_INFO:
            return ['Avoid using your name, email, or other personal information']
        if issue is IssueCode.PASSWORD_REUSED:
            return [f'Choose a password you have not used in your last {policy.prevent_reuse} passwords']
        return []
