"""Tests for weak-pattern detection"""
from passguard.models.validation import IdentityInfo
from passguard.utils.patterns import (
    contains_user_info, count_special_chars, has_repeating_pattern,
    has_sequential_chars, is_common_password,
)


class TestRepeatingPattern:

    def test_repeated_window_detected(self):
        assert has_repeating_pattern("xyzQxyz")

    def test_overlapping_repeat_detected(self):
        assert has_repeating_pattern("aaaa")

    def test_unique_windows(self):
        assert not has_repeating_pattern("abcdefg")

    def test_shorter_than_window(self):
        assert not has_repeating_pattern("ab")
        assert not has_repeating_pattern("")


class TestSequentialChars:

    def test_forward_sequences(self):
        assert has_sequential_chars("myABCpass")
        assert has_sequential_chars("go123")
        assert has_sequential_chars("QWErty")

    def test_reverse_sequences(self):
        assert has_sequential_chars("xCBAx")
        assert has_sequential_chars("321go")
        assert has_sequential_chars("dsa!")

    def test_no_sequence(self):
        assert not has_sequential_chars("hjkl-mnop")


class TestCommonPassword:

    def test_password_contains_common_entry(self):
        assert is_common_password("MyPassword!!")

    def test_password_contained_in_common_entry(self):
        assert is_common_password("foot")

    def test_uncommon_password(self):
        assert not is_common_password("Xk9#mZ2$vL")

    def test_custom_dictionary(self):
        assert is_common_password("Hunter2!", dictionary=["hunter"])
        assert not is_common_password("Hunter2!", dictionary=["tiger"])


class TestUserInfo:

    def test_password_contains_name(self):
        identity = IdentityInfo(first_name="Alice")
        assert contains_user_info("alice2024!", identity)

    def test_password_contained_in_email(self):
        identity = IdentityInfo(email="bob.builder@example.com")
        assert contains_user_info("Builder", identity)

    def test_unrelated_password(self):
        identity = IdentityInfo(first_name="Alice", last_name="Smith",
                                email="alice@example.com", username="asmith")
        assert not contains_user_info("Vivid-Lantern-42!!", identity)

    def test_empty_identity(self):
        assert not contains_user_info("anything", IdentityInfo())
        assert not contains_user_info("anything", None)


def test_count_special_chars():
    assert count_special_chars("a!b@c#") == 3
    assert count_special_chars("plain") == 0
    assert count_special_chars("tilde~") == 0
