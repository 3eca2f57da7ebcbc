from __future__ import annotations

from typing import Optional


class FireDataError(Exception):
    """Raised when hotspot data cannot be obtained from the upstream source."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail or message
        super().__init__(message)


class FirmsError(FireDataError):
    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message, detail=detail)
