import secrets
import time

from sqlalchemy.orm import DeclarativeBase

OBJECT_ID_LENGTH = 24


def generate_object_id() -> str:
    """Generate a 24 character hexadecimal document identifier.

    The first 8 characters encode the creation time in seconds, the rest
    are random, so identifiers sort roughly by creation time.

    Returns:
        str: A new identifier.
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


class Base(DeclarativeBase):
    pass
