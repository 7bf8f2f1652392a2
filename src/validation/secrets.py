import re

MIN_SECRET_LENGTH = 50


def validate_secret_strength(secret: str) -> str:
    """Validate that a JWT signing secret is strong enough for production.

    A secret must be at least 50 characters long and contain at least one
    lowercase letter, one uppercase letter and one digit.

    Args:
        secret (str): The signing secret to validate.

    Returns:
        str: The validated secret.

    Raises:
        ValueError: If the secret doesn't meet strength requirements.
    """
    if len(secret) < MIN_SECRET_LENGTH:
        raise ValueError(
            f"Secret must contain at least {MIN_SECRET_LENGTH} characters."
        )

    pattern = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9]).*$"
    if not re.match(pattern, secret):
        raise ValueError(
            "Secret must contain at least one lowercase letter, "
            "one uppercase letter and one digit."
        )

    return secret
