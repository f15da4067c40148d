"""Unit tests for bcrypt password hashing."""

import pytest

from bookshelf.auth.passwords import hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("password123", rounds=4)

        assert hashed != "password123"
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = hash_password("password123", rounds=4)

        assert verify_password("password123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("password123", rounds=4)

        assert verify_password("password124", hashed) is False

    def test_same_password_hashes_differently(self):
        """Each hash gets its own salt."""
        assert hash_password("secret", rounds=4) != hash_password("secret", rounds=4)

    def test_malformed_hash_never_matches(self):
        assert verify_password("secret", "not-a-bcrypt-hash") is False

    @pytest.mark.parametrize("password", ["ünïcödé-pässwörd", "x" * 100])
    def test_long_and_unicode_passwords(self, password):
        hashed = hash_password(password, rounds=4)

        assert verify_password(password, hashed) is True
