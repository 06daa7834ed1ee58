"""
RK Media Server v1.0.0 - Errors
Typed failures raised by the media core
"""


class MediaError(Exception):
    """Base class for failures surfaced to the caller"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MediaError):
    """Library, directory or file is absent"""

    status_code = 404


class ConflictError(MediaError):
    """Duplicate library name or duplicate item filepath"""

    status_code = 409


class InvalidInputError(MediaError):
    """Rejected input (e.g. a library name changed by sanitization)"""

    status_code = 400


class ForbiddenError(MediaError):
    """Directory cannot be read due to permissions"""

    status_code = 403


class StartupError(RuntimeError):
    """No usable base directory exists; the process must not start"""
