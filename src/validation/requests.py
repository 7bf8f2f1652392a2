import re
from dataclasses import dataclass
from typing import Optional

from fastapi import Query

from exceptions.api import InvalidObjectIdError, InvalidQueryParametersError

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
DEFAULT_PAGE = 1
# Largest OFFSET a signed 64-bit database integer can hold.
MAX_OFFSET = 2 ** 63 - 1


def is_valid_object_id(value: str) -> bool:
    return bool(OBJECT_ID_PATTERN.match(value))


def validate_object_id(value: str, message: str) -> str:
    """Check that a path parameter is a 24 character hexadecimal identifier.

    Args:
        value (str): Raw path parameter.
        message (str): Error message naming the rejected parameter.

    Returns:
        str: The identifier, lowercased.

    Raises:
        InvalidObjectIdError: If the value is not a valid identifier.
    """
    if not is_valid_object_id(value):
        raise InvalidObjectIdError(message)
    return value.lower()


@dataclass(frozen=True)
class Pagination:
    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidQueryParametersError


def get_pagination(
    limit: Optional[str] = Query(
        None, description=f"Page size, from 1 to {MAX_LIMIT}"
    ),
    page: Optional[str] = Query(None, description="Page number, from 1")
) -> Pagination:
    """Parse the ``limit`` and ``page`` query parameters of list endpoints.

    Values outside the accepted ranges are rejected instead of clamped, as is
    a page whose offset does not fit a 64-bit database integer.

    Raises:
        InvalidQueryParametersError: If a value is not an integer or is out of range.
    """
    parsed_limit = _parse_int(limit, DEFAULT_LIMIT)
    parsed_page = _parse_int(page, DEFAULT_PAGE)

    if not 1 <= parsed_limit <= MAX_LIMIT or parsed_page < 1:
        raise InvalidQueryParametersError
    if (parsed_page - 1) * parsed_limit > MAX_OFFSET:
        raise InvalidQueryParametersError

    return Pagination(limit=parsed_limit, page=parsed_page)
