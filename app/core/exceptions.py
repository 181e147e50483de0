"""Exception types raised by the connector and how they are classified."""

from __future__ import annotations

from enum import Enum

import aiohttp
from sqlalchemy.exc import SQLAlchemyError


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    REMOTE = "remote"
    STORE = "store"
    UNEXPECTED = "unexpected"


class ConnectorError(Exception):
    """Base class for errors raised by this service."""

    kind = ErrorKind.UNEXPECTED


class ConfigurationError(ConnectorError, RuntimeError):
    """Required configuration is missing or unusable; not recoverable per request."""


class GoogleApiError(ConnectorError):
    """Non-success response from the Google Business Profile API."""

    kind = ErrorKind.REMOTE

    def __init__(self, status: int, body: str, url: str | None = None) -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"Google API error {status}: {body}")


class MissingIdentifierError(ConnectorError):
    kind = ErrorKind.VALIDATION


class BusinessNotFoundError(ConnectorError):
    kind = ErrorKind.NOT_FOUND


class RepositoryError(ConnectorError):
    kind = ErrorKind.STORE


class RecordExistsError(RepositoryError):
    pass


class RecordNotFoundError(RepositoryError):
    pass


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception caught at a workflow boundary to an ErrorKind."""
    if isinstance(exc, ConnectorError):
        return exc.kind
    if isinstance(exc, (aiohttp.ClientError, TimeoutError)):
        return ErrorKind.REMOTE
    if isinstance(exc, SQLAlchemyError):
        return ErrorKind.STORE
    return ErrorKind.UNEXPECTED


def error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
