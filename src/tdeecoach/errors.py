"""Exception types shared across tdeecoach."""

from __future__ import annotations

from typing import Optional


class TDEECoachError(Exception):
    """Base exception for tdeecoach errors."""

    pass


class InvalidProfileError(TDEECoachError):
    """Raised when a profile payload cannot be parsed into a UserProfile."""

    pass


class ProviderError(TDEECoachError):
    """Raised when the external text-generation provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
