"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PortalAPIError(DomainException):
    """Backend API returned an error or is unavailable"""

    def __init__(self, message: str, status_code: int | None = None, timed_out: bool = False):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.timed_out = timed_out


class InvalidPayloadError(PortalAPIError):
    """Backend returned JSON that does not match the expected shape"""

    pass


class NotAuthenticatedError(DomainException):
    """Operation requires a signed-in session"""

    pass


class UnknownReportError(DomainException):
    """Report kind has no export definition"""

    pass


class PrintError(DomainException):
    """Host print command failed"""

    pass
