"""
Error taxonomy shared by the services and the request router.

Services raise subclasses of ``ConnectAppError``; the router catches
them and renders the failure envelope ``{"success": false, "message": ...}``.
``message`` is always safe to show to a client: storage details stay
in the logs.  ``status_code`` is the HTTP status used for the envelope.
Service‑level failures answer with 200, as the first deployment
did; only request decoding problems and a dead database use error
statuses.
"""

from fastapi import status


class ConnectAppError(Exception):
    """Base class for all errors reported through the envelope."""

    message = "Request failed."
    status_code = status.HTTP_200_OK

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ConnectAppError):
    """A required field is missing or empty after trimming."""

    message = "Required fields are missing."


class DuplicateEmailError(ConnectAppError):
    message = "This email is already registered."


class InvalidCredentialsError(ConnectAppError):
    """Unknown email and wrong password are deliberately reported alike."""

    message = "Invalid email or password."


class ForbiddenOrNotFoundError(ConnectAppError):
    """The post does not exist or belongs to somebody else."""

    message = "You cannot delete this post (or it does not exist)."


class StorageError(ConnectAppError):
    message = "A database error occurred."


class UnknownActionError(ConnectAppError):
    message = "Unknown action."
    status_code = status.HTTP_400_BAD_REQUEST


class MalformedRequestError(ConnectAppError):
    message = "Invalid action specified."
    status_code = status.HTTP_400_BAD_REQUEST


class DatabaseUnavailableError(ConnectAppError):
    """The per‑request connection could not be opened.  Fatal for the request."""

    message = "Database connection failed."
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
