"""Exception hierarchy for i18n-light.

All custom exceptions inherit from I18nError, which provides:
- message: Human-readable error description
- error_code: Machine-readable code (e.g., "LOCALE_LOAD_FAILED")
- details: Optional dict with additional context

Missing phrases are never an error; the resolver degrades to returning
the requested path instead.
"""

from typing import Any


class I18nError(Exception):
    """Base exception for all i18n-light errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(I18nError):
    """Configuration is missing, ambiguous or invalid.

    Raised synchronously by configure() and never recovered internally.
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged: dict[str, Any] = {"option": option} if option else {}
        if details:
            merged.update(details)
        super().__init__(message, "CONFIG_ERROR", merged)
        self.option = option


class LoadError(I18nError):
    """A locale dictionary could not be read or parsed."""

    def __init__(self, locale: str, reason: str, location: str | None = None):
        msg = f"Unable to load locale '{locale}': {reason}"
        if location:
            msg = f"Unable to load locale '{locale}' from {location}: {reason}"
        super().__init__(
            msg,
            "LOCALE_LOAD_FAILED",
            {"locale": locale, "location": location, "reason": reason}
            if location
            else {"locale": locale, "reason": reason},
        )
        self.locale = locale
        self.location = location
        self.reason = reason
