"""
Typed failures raised by the service layer.

Each error carries the HTTP status it maps to; main.py renders them as
``{"message": ...}`` bodies.
"""

from typing import Optional


class ShareError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(ShareError):
    status_code = 400
    message = "Invalid input"


class DuplicateEmail(InvalidInput):
    message = "User already exists"


class InvalidCredentials(InvalidInput):
    message = "Invalid credentials"


class DonationUnavailable(InvalidInput):
    message = "This donation is no longer available"


class InvalidStatus(InvalidInput):
    message = "Invalid status value"


class RequestAlreadyResolved(InvalidInput):
    message = "Only pending requests can be updated"


class AuthError(ShareError):
    status_code = 401
    message = "Not authorized"


class MissingToken(AuthError):
    message = "Access token required"


class InvalidToken(AuthError):
    status_code = 403
    message = "Invalid token"


class Forbidden(AuthError):
    status_code = 403
    message = "Not authorized to update this request"


class RoleForbidden(AuthError):
    status_code = 403
    message = "Only recipients can request food"


class NotFoundError(ShareError):
    status_code = 404
    message = "Not found"


class UserNotFound(NotFoundError):
    message = "User not found"


class DonationNotFound(NotFoundError):
    message = "Donation not found"


class RequestNotFound(NotFoundError):
    message = "Request not found"
