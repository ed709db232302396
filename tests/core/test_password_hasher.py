"""
Tests for password hashing.
"""
import pytest

from frontdesk.core.security import PasswordHasher
from frontdesk.exceptions import HashingFailure


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_then_verify_roundtrip(hasher):
    hashed = hasher.hash("correct horse")
    assert hashed != "correct horse"
    assert hasher.verify(hashed, "correct horse")


def test_same_password_hashes_differently(hasher):
    first = hasher.hash("repeat-me")
    second = hasher.hash("repeat-me")
    assert first != second
    assert hasher.verify(first, "repeat-me")
    assert hasher.verify(second, "repeat-me")


def test_wrong_password_does_not_verify(hasher):
    hashed = hasher.hash("password123")
    assert not hasher.verify(hashed, "password124")


def test_empty_password_is_hashed(hasher):
    hashed = hasher.hash("")
    assert hasher.verify(hashed, "")
    assert not hasher.verify(hashed, "x")


@pytest.mark.parametrize("bad_hash", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_malformed_hash_verifies_false(hasher, bad_hash):
    assert hasher.verify(bad_hash, "password123") is False


def test_password_over_72_bytes_is_refused(hasher):
    with pytest.raises(HashingFailure) as exc_info:
        hasher.hash("a" * 73)
    assert exc_info.value.status_code == 500


def test_password_of_72_bytes_is_accepted(hasher):
    secret = "b" * 72
    assert hasher.verify(hasher.hash(secret), secret)


def test_configured_rounds_end_up_in_hash(hasher):
    assert hasher.hash("pw").startswith("$2b$04$")


def test_dummy_verify_always_fails(hasher):
    assert hasher.verify_dummy("anything") is False
    assert hasher.verify_dummy("") is False
