"""
Error taxonomy shared by the stores, the flows and the HTTP layer.

Every error carries a caller-safe message and the HTTP status it maps to.
Driver and transport details stay on the exception chain (``raise ... from``)
for logging and never reach the response body.
"""


class AppError(Exception):
    status_code = 500
    default_message = "internal server error"

    def __init__(self, message: str = None, details: dict = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = 400
    default_message = "invalid input"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    default_message = "invalid credentials"


class InvalidSignatureError(UnauthorizedError):
    default_message = "invalid token"


class TokenExpiredError(UnauthorizedError):
    default_message = "token has expired"


class NotFoundError(AppError):
    status_code = 404
    default_message = "resource not found"


class DuplicateResourceError(AppError):
    status_code = 409
    default_message = "resource already exists"


class DuplicateAccountError(DuplicateResourceError):
    default_message = "staff member already exists"


class UpstreamUnavailableError(AppError):
    status_code = 502
    default_message = "hospital API unavailable"


class InternalFailureError(AppError):
    status_code = 500
    default_message = "internal server error"
