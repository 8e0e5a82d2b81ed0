"""
Error types raised by the league domain and rendered by the web layer.

Each error carries the HTTP status it maps to; the message is shown to the
caller as-is.
"""


class LeagueError(Exception):
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(LeagueError):
    status_code = 400


class AuthenticationError(LeagueError):
    status_code = 401


class ForbiddenError(LeagueError):
    status_code = 403


class NotFoundError(LeagueError):
    status_code = 404


class ConflictError(LeagueError):
    status_code = 409
