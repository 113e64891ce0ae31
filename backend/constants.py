"""
Application-wide constants.

This module centralizes the magic strings and numbers shared by the API,
service and repository layers.
"""
from enum import Enum


class SortDirection(str, Enum):
    """Direction of a `sort=field,dir` query parameter."""

    ASC = 'asc'
    DESC = 'desc'

    @classmethod
    def from_string(cls, value: str) -> 'SortDirection':
        """
        Parse a direction, case-insensitively.

        Raises:
            ValueError: If value is not asc/desc
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid sort direction: {value}")


class AlertAction(str, Enum):
    """Entity alert kinds reported in response headers."""

    CREATED = 'created'
    UPDATED = 'updated'
    DELETED = 'deleted'


# Fields the store owns; never copied from a request body.
IDENTIFIER_FIELD = 'id'
VERSION_FIELD = 'version'

TOTAL_COUNT_HEADER = 'X-Total-Count'
ALERT_HEADER_SUFFIX = '-alert'
PARAMS_HEADER_SUFFIX = '-params'


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
