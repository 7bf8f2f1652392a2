import re

import email_validator
from email_validator import EmailNotValidError

PASSWORD_PATTERN = r"^(?=.*[A-Z])(?=.*[a-z])(?=.*[0-9])(?=.*[@$!%*?&#]).*$"
MAX_NAME_LENGTH = 100


def validate_password_strength(password: str) -> str:
    """Validate password strength requirements.

    A password needs at least 8 characters with an uppercase letter, a
    lowercase letter, a digit and one of ``@$!%*?&#``.

    Raises:
        ValueError: If the password doesn't meet strength requirements.
    """
    if len(password) < 8:
        raise ValueError("Password must contain at least 8 characters.")

    if not re.match(PASSWORD_PATTERN, password):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one digit, and one special character (@, $, !, %, *, ?, &, #)."
        )

    return password


def validate_email(user_email: str) -> str:
    """Validate and normalize an email address without a DNS lookup.

    Raises:
        ValueError: If the email address is invalid.
    """
    try:
        email_info = email_validator.validate_email(
            user_email, check_deliverability=False
        )
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return email_info.normalized


def validate_name(name: str) -> str:
    """Strip a display name and check it is neither blank nor too long.

    Raises:
        ValueError: If the name is empty or longer than 100 characters.
    """
    name = name.strip()
    if not name:
        raise ValueError("Name must not be empty.")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(
            f"Name must contain at most {MAX_NAME_LENGTH} characters."
        )
    return name
