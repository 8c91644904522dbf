"""Registration input rules.

Password strength plus the username and display-name constraints applied
when an account is created or its profile changes.
"""

import re
from dataclasses import dataclass

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class ValidationIssue:
    """A single rule violation.

    Attributes:
        field: Name of the offending input field.
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


class PasswordValidator:
    """Checks a password against the strength policy.

    Default policy: at least 8 characters with an uppercase letter, a
    lowercase letter, a digit and a special character.
    """

    SPECIAL_CHARS = r"!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>\/?`~"

    def __init__(self, min_length: int = 8) -> None:
        self.min_length = min_length
        self._rules = [
            (r"[A-Z]", "password_no_uppercase", "an uppercase letter"),
            (r"[a-z]", "password_no_lowercase", "a lowercase letter"),
            (r"\d", "password_no_digit", "a digit"),
            (f"[{self.SPECIAL_CHARS}]", "password_no_special", "a special character"),
        ]

    def validate(self, password: str) -> list[ValidationIssue]:
        """Return every rule the password breaks; empty when it passes."""
        issues: list[ValidationIssue] = []
        if len(password) < self.min_length:
            issues.append(
                ValidationIssue(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )
        for pattern, code, what in self._rules:
            if not re.search(pattern, password):
                issues.append(
                    ValidationIssue(
                        field="password",
                        message=f"Password must contain at least one {what}",
                        code=code,
                    )
                )
        return issues

    def is_valid(self, password: str) -> bool:
        return not self.validate(password)


def validate_username(username: str) -> list[ValidationIssue]:
    """Check length and character set of a username."""
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return [
            ValidationIssue(
                field="username",
                message=(
                    f"Username must be between {USERNAME_MIN_LENGTH} and "
                    f"{USERNAME_MAX_LENGTH} characters"
                ),
                code="username_length",
            )
        ]
    if not USERNAME_PATTERN.match(username):
        return [
            ValidationIssue(
                field="username",
                message="Username can only contain letters, numbers, and underscores",
                code="username_characters",
            )
        ]
    return []


def validate_name(field: str, value: str | None) -> list[ValidationIssue]:
    """Check an optional first or last name."""
    if value is not None and len(value) > NAME_MAX_LENGTH:
        return [
            ValidationIssue(
                field=field,
                message=f"Name must be at most {NAME_MAX_LENGTH} characters",
                code="name_too_long",
            )
        ]
    return []


default_password_validator = PasswordValidator()
