"""Exception types raised by servicelogger."""

from __future__ import annotations


class ServiceLoggerError(Exception):
    """Base class for all servicelogger failures."""


class ConfigError(ServiceLoggerError):
    """Required configuration is missing or contradictory."""


class TemplateError(ServiceLoggerError):
    """Service log template could not be parsed."""


class ConnectionSetupError(ServiceLoggerError):
    """OCM connection could not be established."""


class OCMError(ServiceLoggerError):
    """OCM request failed with structured error info."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail or message  # Fallback to full message if no detail


__all__ = ["ServiceLoggerError", "ConfigError", "TemplateError", "ConnectionSetupError", "OCMError"]
