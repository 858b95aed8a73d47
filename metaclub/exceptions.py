"""
Domain errors for the registration backend.

The API layer maps each subclass to an HTTP status and a
``{"status": "error", "message": ...}`` body.
"""


class MetaclubError(Exception):
    """Base class for all application errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class RegistrationValidationError(MetaclubError):
    """Submitted team or member data is malformed."""

    status_code = 400


class AuthenticationError(MetaclubError):
    """Missing, invalid or expired admin credentials."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class TeamNotFoundError(MetaclubError):
    status_code = 404

    def __init__(self, team_id: int):
        self.team_id = team_id
        super().__init__(f"Team not found (id={team_id})")


class PersistenceError(MetaclubError):
    """A database write failed and was rolled back."""

    status_code = 500

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
