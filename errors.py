"""
Placement code errors.
"""

from __future__ import annotations


class MalformedCode(ValueError):
    """
    Raised when a placement or connection string cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.reason = reason
