"""Error taxonomy shared by sources, services and routes."""

from __future__ import annotations

from typing import Any, Optional


class DefaiError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(DefaiError):
    """No pair or group matched a query. An expected outcome, not a fault."""


class UpstreamError(DefaiError):
    """An external source failed or reported an error in its payload."""

    def __init__(
        self,
        source: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Any = None,
        errors: Any = None,
    ):
        super().__init__(message)
        self.source = source
        self.status_code = status_code
        self.detail = detail
        self.errors = errors


class ValidationError(DefaiError):
    """Required identifying input is missing; the caller should be asked for it."""
