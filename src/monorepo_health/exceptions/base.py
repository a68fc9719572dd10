"""Base exception for monorepo-health."""

from typing import Dict, Optional


class MonorepoHealthError(Exception):
    """Base exception for all monorepo-health errors.

    ``details`` are rendered after the message; ``hint`` is a one-line
    suggestion the CLI shows underneath it.
    """

    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, str]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if hint is not None:
            self.hint = hint

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
