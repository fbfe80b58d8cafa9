"""
Error taxonomy shared by services and routes.

Services raise these; the handlers registered in ``acompana.main`` turn them
into ``{"error": message}`` responses with the matching status code.
"""

from fastapi import status


class AcompanaError(Exception):
    """Base class for errors with a human-readable message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AcompanaError):
    """Malformed or empty input. Raised before any side effect."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AcompanaError):
    """Missing or invalid credential."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AcompanaError):
    """Record absent or not owned by the requesting user."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AcompanaError):
    """Connection or query failure in the relational store."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ExternalServiceError(AcompanaError):
    """The generative-AI responder timed out or failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
