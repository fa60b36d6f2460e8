"""Typed errors for the travel gateway.

Each outbound collaborator fails with its own error kind so the API layer
can turn any of them into a generic failure message for the caller.

All errors inherit from GatewayError and can optionally wrap a root cause
exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GatewayError(Exception):
    """Base error for the travel gateway.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class AuthError(GatewayError):
    """Token exchange with the travel API failed.

    Attributes:
        status_code: HTTP status of the token endpoint, if one was received
    """

    status_code: Optional[int] = None


@dataclass
class SearchError(GatewayError):
    """Travel API answered a search call with a 4xx/5xx status.

    Attributes:
        status_code: Upstream HTTP status
        body: Upstream error body, verbatim
    """

    status_code: Optional[int] = None
    body: str = ""

    def __str__(self) -> str:
        if self.body:
            return f"{self.message}: {self.body}"
        return super().__str__()


@dataclass
class ExtractionError(GatewayError):
    """Completion call failed or returned content that is not a travel request.

    Attributes:
        content: Raw completion content, when one was received
    """

    content: Optional[str] = field(default=None, repr=False)


@dataclass
class ConfigurationError(GatewayError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
