"""Error taxonomy shared by services and the HTTP boundary.

Each class carries the HTTP status it maps to so views never have to
translate exceptions case by case.
"""


class ResumeTrackerError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(ResumeTrackerError):
    status_code = 404


class InvalidInput(ResumeTrackerError):
    status_code = 400


class IndexOutOfBounds(InvalidInput):
    pass


class UnknownPath(InvalidInput):
    def __init__(self, path):
        self.path = list(path) if isinstance(path, (list, tuple)) else path
        super().__init__(f"Unknown field path: {self.path!r}")


class QuotaExhausted(ResumeTrackerError):
    status_code = 403


class UpstreamFailure(ResumeTrackerError):
    status_code = 502


class AIClientUnavailable(ResumeTrackerError):
    status_code = 503


class PersistenceFailure(ResumeTrackerError):
    status_code = 500
