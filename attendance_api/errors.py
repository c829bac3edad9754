"""Error taxonomy shared by the integration layer and the HTTP routes.

Every error carries the HTTP status it maps to so the app factory can
render all of them through a single handler.
"""


class AttendanceApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AttendanceApiError):
    """Missing or malformed request parameters."""

    status_code = 400


class DayNotFoundError(AttendanceApiError):
    """The requested day label is absent from the class header row."""

    status_code = 404


class RemoteError(AttendanceApiError):
    """Any failure reported by the spreadsheet backend, transport or auth."""

    status_code = 500


class CredentialsError(RemoteError):
    pass
