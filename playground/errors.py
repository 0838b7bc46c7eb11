# playground/errors.py
from __future__ import annotations


class PlaygroundError(RuntimeError):
    """base for everything the playground raises on purpose"""


class FormatServiceError(PlaygroundError):
    def __init__(self, message: str, *, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class MalformedResponse(FormatServiceError):
    pass


class InitialLoadFailure(PlaygroundError):
    pass


class SubmissionFailure(PlaygroundError):
    pass


class SubmissionInProgress(PlaygroundError):
    pass


class UnknownVersionError(PlaygroundError, ValueError):
    def __init__(self, version: str, known=()):
        known_s = ", ".join(sorted(known)) or "none"
        super().__init__(f"Unknown version: {version} (known: {known_s})")
        self.version = version
