"""
Failures raised by the stores and services.

Every error carries the HTTP status and the public message the transport
renders, so routers never translate exceptions themselves.
"""
from typing import Optional


class ServiceError(Exception):
    status_code = 500
    message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidCredentials(ServiceError):
    status_code = 401
    message = "Invalid credentials"


class EmailTaken(ServiceError):
    status_code = 400
    message = "Email already registered"


class EmailNotFound(ServiceError):
    status_code = 404
    message = "Email not found"


class NotFound(ServiceError):
    status_code = 404
    message = "Student not found"


class ValidationFailure(ServiceError):
    status_code = 400
    message = "Missing required fields"


class InvalidToken(ServiceError):
    status_code = 401
    message = "Could not validate credentials"


class Forbidden(ServiceError):
    status_code = 403
    message = "Not allowed"


class PersistenceFailure(ServiceError):
    # Storage details stay in the logs
    status_code = 500
    message = "Storage unavailable"
