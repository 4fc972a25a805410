"""
Tests for Argon2 password hashing and password complexity validation.
"""

import pytest

from paperbook_backend.password_utils import (
    PasswordComplexityRequirements,
    PasswordValidationError,
    create_password_hash,
    hash_password,
    is_argon2_hash,
    needs_rehash,
    validate_password_strength,
    verify_password,
)


class TestPasswordHashing:
    """Tests for basic password hashing operations."""

    def test_hash_password_creates_valid_hash(self):
        hashed = hash_password("Bookshelf#2024")

        assert hashed.startswith("$argon2")
        assert "Bookshelf#2024" not in hashed

    def test_hash_password_uses_unique_salt(self):
        """Same password, different salt, both verify."""
        password = "Bookshelf#2024"
        hashed1 = hash_password(password)
        hashed2 = hash_password(password)

        assert hashed1 != hashed2
        assert verify_password(password, hashed1)
        assert verify_password(password, hashed2)

    def test_verify_password_incorrect(self):
        hashed = hash_password("Bookshelf#2024")

        assert verify_password("Bookshelf#2025", hashed) is False
        assert verify_password("", hashed) is False

    def test_verify_password_case_sensitive(self):
        password = "Bookshelf#2024"
        hashed = hash_password(password)

        assert verify_password(password, hashed) is True
        assert verify_password(password.lower(), hashed) is False
        assert verify_password(password.upper(), hashed) is False

    def test_needs_rehash_new_hash(self):
        assert needs_rehash(hash_password("Bookshelf#2024")) is False

    def test_is_argon2_hash_detection(self):
        assert is_argon2_hash(hash_password("test")) is True

        assert is_argon2_hash("plaintext") is False
        assert is_argon2_hash("$2b$12$...") is False  # bcrypt
        assert is_argon2_hash("") is False


class TestPasswordComplexity:
    """Tests for password complexity validation."""

    def test_valid_password_passes(self):
        for password in ["Bookshelf#2024", "P@ssw0rd2024", "Notebook!77", "T3st!Password"]:
            validate_password_strength(password)

    def test_password_too_short(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength("Short1!")

        assert exc_info.value.code == "PASSWORD_TOO_SHORT"
        assert str(PasswordComplexityRequirements.MIN_LENGTH) in exc_info.value.message

    def test_password_too_long(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength("A1!" + "x" * 200)

        assert exc_info.value.code == "PASSWORD_TOO_LONG"

    @pytest.mark.parametrize("password,missing", [
        ("mysecure987!", "uppercase"),
        ("MYSECURE987!", "lowercase"),
        ("MySecurePassword!", "digit"),
        ("MySecurePassword987", "special"),
    ])
    def test_password_complexity(self, password, missing):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength(password)

        assert exc_info.value.code == "PASSWORD_COMPLEXITY_FAILED"
        assert missing in exc_info.value.message.lower()

    @pytest.mark.parametrize("password", ["Password123!", "Welcome123!", "Admin123!", "Paperbook123!"])
    def test_password_common_rejected(self, password):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength(password)

        assert exc_info.value.code == "PASSWORD_TOO_COMMON"

    @pytest.mark.parametrize("password", ["Abcde12345!", "Qwerty987!x"])
    def test_password_contains_sequence(self, password):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength(password)

        assert exc_info.value.code == "PASSWORD_CONTAINS_SEQUENCE"

    def test_password_contains_name(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength("MyJohn987!", name="John Doe")

        assert exc_info.value.code == "PASSWORD_CONTAINS_NAME"

    def test_short_name_parts_ignored(self):
        validate_password_strength("MyJo!Notebook9", name="Jo Li")

    def test_password_contains_email(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength("John.Doe987!", email="john.doe@example.com")

        assert exc_info.value.code == "PASSWORD_CONTAINS_EMAIL"

    def test_custom_forbidden_words(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            validate_password_strength("MyPaperbook7!", custom_forbidden_words=["paperbook", "stationery"])

        assert exc_info.value.code == "PASSWORD_CONTAINS_FORBIDDEN_WORD"


class TestCreatePasswordHash:
    """Tests for the convenience function create_password_hash."""

    def test_create_password_hash_with_validation(self):
        hashed = create_password_hash("Bookshelf#2024", validate=True)

        assert is_argon2_hash(hashed)
        assert verify_password("Bookshelf#2024", hashed)

    def test_create_password_hash_validation_fails(self):
        with pytest.raises(PasswordValidationError):
            create_password_hash("weak", validate=True)

    def test_create_password_hash_without_validation(self):
        hashed = create_password_hash("weak", validate=False)

        assert verify_password("weak", hashed)

    def test_create_password_hash_with_email_check(self):
        with pytest.raises(PasswordValidationError) as exc_info:
            create_password_hash("MyAlice987!", validate=True, email="alice@paperbook.dev")

        assert exc_info.value.code == "PASSWORD_CONTAINS_EMAIL"


class TestEdgeCases:

    def test_verify_invalid_hash_format(self):
        assert verify_password("test", "invalid_hash") is False
        assert verify_password("test", "") is False

    def test_hash_unicode_password(self):
        password = "Pässwörd987!é"
        hashed = hash_password(password)

        assert verify_password(password, hashed)
        assert not verify_password("Passwoord987!", hashed)

    def test_needs_rehash_invalid_hash(self):
        assert needs_rehash("invalid") is True
        assert needs_rehash("") is True
