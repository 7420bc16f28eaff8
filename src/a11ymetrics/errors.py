"""Custom exception types for the accessibility issue metrics tool."""


class A11yMetricsError(Exception):
    """Base exception for all recoverable metrics errors."""


class ConfigurationError(A11yMetricsError):
    """Raised when runtime configuration or request input is missing or invalid."""


class AuthenticationError(A11yMetricsError):
    """Raised when the GitHub credential is unavailable."""


class ApiError(A11yMetricsError):
    """Raised when a GitHub or relay request fails at the transport level or returns no JSON."""


class DataValidationError(A11yMetricsError):
    """Raised when an issue payload does not have the expected shape or carries errors."""
