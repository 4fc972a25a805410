"""
Password hashing and validation utilities using Argon2id.

Passwords are stored only as one-way Argon2id hashes in PHC format; every
hash carries its own random salt and parameters, so stored hashes keep
verifying after the parameters below are raised (see `needs_rehash`).

Example Usage:
    >>> from paperbook_backend.password_utils import create_password_hash, verify_password
    >>> hashed = create_password_hash("Bookshelf#2024", email="reader@paperbook.dev")
    >>> verify_password("Bookshelf#2024", hashed)
    True
"""

from typing import Optional, List
from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHash


# Based on OWASP recommendations and Argon2 RFC 9106
_ph = PasswordHasher(
    time_cost=3,        # Number of iterations
    memory_cost=65536,  # 64 MB memory usage
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


@dataclass
class PasswordValidationError(Exception):
    """Exception raised when password validation fails."""
    message: str
    code: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class PasswordComplexityRequirements:
    """Password complexity requirements applied on sign-up and password change."""

    MIN_LENGTH = 8

    # Prevents hashing arbitrarily large inputs
    MAX_LENGTH = 128

    REQUIRE_UPPERCASE = True
    REQUIRE_LOWERCASE = True
    REQUIRE_DIGIT = True
    REQUIRE_SPECIAL = True

    SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

    COMMON_PASSWORDS = {
        "password123", "Password123", "Password123!",
        "admin123", "Admin123", "Admin123!",
        "Welcome123", "Welcome123!",
        "Qwerty123", "Qwerty123!",
        "123456789", "12345678",
        "paperbook123", "Paperbook123", "Paperbook123!",
    }

    REJECT_SEQUENCES = [
        "12345", "abcde", "qwerty", "asdfg",
    ]


def validate_password_strength(
    password: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    custom_forbidden_words: Optional[List[str]] = None,
) -> None:
    """
    Validate password meets complexity requirements.

    Args:
        password: The password to validate
        name: Optional display name; the password must not contain it
        email: Optional email; the password must not contain its local part
        custom_forbidden_words: Optional list of additional forbidden words

    Raises:
        PasswordValidationError: If password doesn't meet requirements
    """
    errors = []

    if len(password) < PasswordComplexityRequirements.MIN_LENGTH:
        raise PasswordValidationError(
            message=f"Password must be at least {PasswordComplexityRequirements.MIN_LENGTH} characters long",
            code="PASSWORD_TOO_SHORT"
        )

    if len(password) > PasswordComplexityRequirements.MAX_LENGTH:
        raise PasswordValidationError(
            message=f"Password must not exceed {PasswordComplexityRequirements.MAX_LENGTH} characters",
            code="PASSWORD_TOO_LONG"
        )

    if PasswordComplexityRequirements.REQUIRE_UPPERCASE:
        if not any(c.isupper() for c in password):
            errors.append("at least one uppercase letter (A-Z)")

    if PasswordComplexityRequirements.REQUIRE_LOWERCASE:
        if not any(c.islower() for c in password):
            errors.append("at least one lowercase letter (a-z)")

    if PasswordComplexityRequirements.REQUIRE_DIGIT:
        if not any(c.isdigit() for c in password):
            errors.append("at least one digit (0-9)")

    if PasswordComplexityRequirements.REQUIRE_SPECIAL:
        if not any(c in PasswordComplexityRequirements.SPECIAL_CHARACTERS for c in password):
            errors.append(f"at least one special character ({PasswordComplexityRequirements.SPECIAL_CHARACTERS})")

    if errors:
        raise PasswordValidationError(
            message=f"Password must contain: {', '.join(errors)}",
            code="PASSWORD_COMPLEXITY_FAILED"
        )

    password_lower = password.lower()
    if password in PasswordComplexityRequirements.COMMON_PASSWORDS:
        raise PasswordValidationError(
            message="This password is too common. Please choose a more unique password.",
            code="PASSWORD_TOO_COMMON"
        )

    for sequence in PasswordComplexityRequirements.REJECT_SEQUENCES:
        if sequence in password_lower:
            raise PasswordValidationError(
                message="Password contains a common sequence. Please choose a more complex password.",
                code="PASSWORD_CONTAINS_SEQUENCE"
            )

    if name:
        for part in name.lower().split():
            if len(part) >= 3 and part in password_lower:
                raise PasswordValidationError(
                    message="Password must not contain your name",
                    code="PASSWORD_CONTAINS_NAME"
                )

    if email:
        local_part = email.split('@')[0].lower()
        if len(local_part) >= 3 and local_part in password_lower:
            raise PasswordValidationError(
                message="Password must not contain parts of your email address",
                code="PASSWORD_CONTAINS_EMAIL"
            )

    if custom_forbidden_words:
        for word in custom_forbidden_words:
            if word.lower() in password_lower:
                raise PasswordValidationError(
                    message="Password contains a forbidden word",
                    code="PASSWORD_CONTAINS_FORBIDDEN_WORD"
                )

    if len(set(password)) <= 2:
        raise PasswordValidationError(
            message="Password must contain more variety of characters",
            code="PASSWORD_TOO_REPETITIVE"
        )


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Returns:
        Argon2 hash string in PHC format:
        $argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>
    """
    return _ph.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time check of a plain password against its Argon2 hash."""
    try:
        _ph.verify(hashed_password, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


def needs_rehash(hashed_password: str) -> bool:
    """True when the hash was produced with parameters other than the current ones."""
    try:
        return _ph.check_needs_rehash(hashed_password)
    except (VerificationError, InvalidHash):
        return True


def is_argon2_hash(value: str) -> bool:
    return value.startswith("$argon2")


def create_password_hash(password: str, validate: bool = True, **validation_kwargs) -> str:
    """
    Validate and hash a password in one step.

    Raises:
        PasswordValidationError: If validation fails
    """
    if validate:
        validate_password_strength(password, **validation_kwargs)
    return hash_password(password)
