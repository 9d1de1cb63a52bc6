# codearchitect/core/errors.py
"""
Exception hierarchy shared by the provider, dispatcher and workspace layers.
"""

from typing import Optional


class CodeArchitectError(Exception):
    """Base class for all Code Architect errors."""

    pass


class ProviderNotConfiguredError(CodeArchitectError):
    """
    Raised when no AI provider is active, or the active hosted provider
    has no credential. Always raised before any network activity.
    """

    pass


class ProviderHTTPError(CodeArchitectError):
    """Raised when a provider answers with a non-success HTTP status."""

    def __init__(self, provider: str, status: int, reason: Optional[str] = None):
        self.provider = provider
        self.status = status
        self.reason = reason or ""
        super().__init__(f"{provider} API error: {status} {self.reason}".rstrip())


class ProviderUnavailableError(CodeArchitectError):
    """Raised by provider health checks."""

    pass


class WorkspaceError(CodeArchitectError):
    """Raised by workspace collaborators (file server or local directory)."""

    pass
