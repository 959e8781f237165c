"""
Error types shared by the feature packages.

Request-terminating errors carry the HTTP status they map to; `main.py`
turns them into `{"error": "..."}` responses. `PersistenceError` never
reaches a client: the store returns it inside a result value and logs it.
"""

from __future__ import annotations

GENERIC_GENERATION_MESSAGE = "Failed to generate icon. Please try again."


class IconApiError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ClientInputError(IconApiError):
    status_code = 400


class ConfigurationError(IconApiError):
    status_code = 500


class UpstreamError(IconApiError):
    """Non-success answer (or no answer) from the generation API."""

    status_code = 500


class GenerationError(UpstreamError):
    """The generation API answered, but not with a usable icon payload."""

    def __init__(self, message: str = GENERIC_GENERATION_MESSAGE) -> None:
        super().__init__(message, status_code=500)


class PersistenceError(RuntimeError):
    def __init__(self, message: str, *, source: str, duplicate: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.duplicate = duplicate
