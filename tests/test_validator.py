"""Tests for password validation"""
import pytest

from passguard.errors import InvalidInputError
from passguard.models.policy import PolicyConfiguration
from passguard.models.validation import IdentityInfo, IssueCode, StrengthLabel
from passguard.services.validator import PasswordValidator


@pytest.fixture
def validator():
    return PasswordValidator()


def test_short_password_scenario(validator, policy):
    result = validator.validate("Tr0ub4dor&3", IdentityInfo(), policy)
    assert IssueCode.TOO_SHORT in result.issues
    assert not result.is_valid


def test_strong_passphrase_scenario(validator, policy):
    result = validator.validate("C0rrect-Horse-Battery99!!", IdentityInfo(), policy)
    assert result.issues == []
    assert result.is_valid
    assert result.score >= 90
    assert result.strength is StrengthLabel.EXCELLENT
    assert result.suggestions == []


@pytest.mark.parametrize("password,issue", [
    ("alllowercase!!99", IssueCode.MISSING_UPPERCASE),
    ("ALLUPPERCASE!!99", IssueCode.MISSING_LOWERCASE),
    ("NoDigitsHere!!xy", IssueCode.MISSING_NUMBER),
    ("NoSpecials99xyzW", IssueCode.INSUFFICIENT_SPECIAL_CHARS),
])
def test_missing_required_class(validator, policy, password, issue):
    result = validator.validate(password, None, policy)
    assert result.issues == [issue]
    assert not result.is_valid


def test_too_long(validator):
    policy = PolicyConfiguration(max_length=20)
    result = validator.validate("Vivid-Lantern-42!!" + "x" * 10, None, policy)
    assert result.issues == [IssueCode.TOO_LONG]


def test_all_checks_run_in_order(validator, policy):
    result = validator.validate("short", None, policy)
    assert result.issues == [
        IssueCode.TOO_SHORT,
        IssueCode.MISSING_UPPERCASE,
        IssueCode.MISSING_NUMBER,
        IssueCode.INSUFFICIENT_SPECIAL_CHARS,
    ]
    assert result.suggestions == [
        'Try using a passphrase with multiple words',
        'Add more characters to meet minimum length requirement',
        'Add at least one uppercase letter (A-Z)',
        'Include at least one number (0-9)',
        'Add special characters like: !@#$%^&*()...',
    ]
    assert result.messages[0] == 'Password must be at least 12 characters long'


def test_common_password(validator, policy):
    result = validator.validate("Password123!!xyz", None, policy)
    assert result.issues == [IssueCode.COMMON_PASSWORD]
    assert 'Avoid common passwords and dictionary words' in result.suggestions


def test_common_password_check_can_be_disabled(validator):
    policy = PolicyConfiguration(prevent_common_passwords=False)
    assert validator.validate("Password123!!xyz", None, policy).is_valid


def test_personal_info(validator, policy):
    identity = IdentityInfo(first_name="Zelda")
    result = validator.validate("Zelda#Rules2024!", identity, policy)
    assert result.issues == [IssueCode.CONTAINS_PERSONAL_INFO]


def test_personal_info_check_can_be_disabled(validator):
    policy = PolicyConfiguration(prevent_user_info=False)
    identity = IdentityInfo(first_name="Zelda")
    assert validator.validate("Zelda#Rules2024!", identity, policy).is_valid


def test_reused_password(validator, policy, tracker):
    tracker.record_change("user-1", "Vivid-Lantern-42!!", policy)

    identity = IdentityInfo(user_id="user-1")
    result = validator.validate("Vivid-Lantern-42!!", identity, policy, tracker)
    assert result.issues == [IssueCode.PASSWORD_REUSED]
    assert not result.is_valid
    assert result.suggestions == ['Choose a password you have not used in your last 5 passwords']

    other = IdentityInfo(user_id="user-2")
    assert validator.validate("Vivid-Lantern-42!!", other, policy, tracker).is_valid


def test_reuse_check_disabled_by_zero_window(validator, policy, tracker):
    tracker.record_change("user-1", "Vivid-Lantern-42!!", policy)
    no_reuse = PolicyConfiguration(prevent_reuse=0)
    identity = IdentityInfo(user_id="user-1")
    assert validator.validate("Vivid-Lantern-42!!", identity, no_reuse, tracker).is_valid


def test_score_floor_applies_without_issues(validator):
    lax = PolicyConfiguration(min_length=8, require_uppercase=False, require_lowercase=False,
                              require_numbers=False, require_special_chars=False)
    result = validator.validate("zzzzzzzz", None, lax)
    assert result.issues == []
    assert result.score == 40
    assert result.strength is StrengthLabel.FAIR
    assert not result.is_valid


@pytest.mark.parametrize("password", [None, 12345678, b"bytes-password"])
def test_non_string_password_rejected(validator, policy, password):
    with pytest.raises(InvalidInputError):
        validator.validate(password, None, policy)


def test_result_serialization(validator, policy):
    data = validator.validate("short", None, policy).to_dict()
    assert data["isValid"] is False
    assert data["issues"] == ["too_short", "missing_uppercase", "missing_number",
                              "insufficient_special_chars"]
    assert data["strength"] in {label.value for label in StrengthLabel}
    assert len(data["messages"]) == 4
