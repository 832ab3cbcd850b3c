"""Validation utilities for Matchwheel.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import Optional

from matchwheel.constants import MIN_NAME_LENGTH
from matchwheel.exceptions import (
    EmailValidationException,
    InvalidParticipantDataException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid


# ========== Email Validation ==========


def validate_email(email: Optional[str]) -> ValidationResult:
    """Validate an optional email address.

    Args:
        email: Email address to validate; empty means no email

    Returns:
        ValidationResult with validation status

    Example:
        >>> result = validate_email("user@example.com")
        >>> if result:
        ...     print(f"Valid email: {result.sanitized_value}")
    """
    if not email or not email.strip():
        return ValidationResult(is_valid=True, sanitized_value=None)

    email = email.strip()

    # RFC 5322 simplified email regex
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if re.match(pattern, email):
        return ValidationResult(is_valid=True, sanitized_value=email)

    return ValidationResult(
        is_valid=False,
        error_message=f"Invalid email format: {email}",
    )


def validate_email_strict(email: Optional[str]) -> Optional[str]:
    """Validate an optional email and raise if it is malformed.

    Returns:
        The trimmed email, or None when no email was given

    Raises:
        EmailValidationException: If email is invalid
    """
    result = validate_email(email)
    if not result:
        raise EmailValidationException(result.error_message)
    return result.sanitized_value


# ========== Name Validation ==========


def validate_participant_name(name: Optional[str]) -> ValidationResult:
    """Validate a participant display name.

    Names are trimmed and must have at least ``MIN_NAME_LENGTH`` characters.
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Participant name is required",
        )

    name = name.strip()
    if len(name) < MIN_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Name must be at least {MIN_NAME_LENGTH} characters",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_participant_name_strict(name: Optional[str]) -> str:
    """Validate a participant name and raise if invalid.

    Raises:
        InvalidParticipantDataException: If the name is missing or too short
    """
    result = validate_participant_name(name)
    if not result:
        raise InvalidParticipantDataException(result.error_message)
    return result.sanitized_value


def name_key(name: str) -> str:
    """Key used for duplicate-name checks: trimmed and case-insensitive."""
    return name.strip().casefold()
