"""
Service-level errors

Raised by services and translated into HTTP responses by a single handler.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for domain errors raised by services"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ServiceError):
    """The request conflicts with current state or is malformed"""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ServiceError):
    """Credentials were rejected"""
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(ServiceError):
    """The current user may not act on this resource"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """The requested resource does not exist"""
    status_code = status.HTTP_404_NOT_FOUND
