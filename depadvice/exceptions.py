"""Custom exceptions for the dependency advice engine."""


class AdviceError(Exception):
    """Base exception for all advice errors."""


class ConfigurationError(AdviceError):
    """Raised when user configuration is invalid. Fatal to the current run only."""


class InvalidRuleError(ConfigurationError):
    """Raised when a logical-dependency rule is not a valid pattern."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid logical dependency rule '{pattern}': {reason}")


class FactsError(AdviceError):
    """Raised when a dependency fact snapshot cannot be loaded."""
