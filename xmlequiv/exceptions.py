"""Custom exceptions for xmlequiv."""


class XmlEquivError(Exception):
    """Base exception for xmlequiv errors."""
    pass


class InvalidArgumentError(XmlEquivError, ValueError):
    """Raised when a required XML argument is missing."""
    def __init__(self, argument: str, message: str = None):
        super().__init__(message or f"{argument} must not be None")
        self.argument = argument


class FilterExpressionError(InvalidArgumentError):
    """Raised when an XPath filter expression cannot be compiled or evaluated."""
    def __init__(self, expression: str, reason: str):
        super().__init__(
            "xpaths_to_ignore",
            f"Invalid XPath filter expression '{expression}': {reason}"
        )
        self.expression = expression
        self.reason = reason


class InvalidOperationError(XmlEquivError, RuntimeError):
    """Raised when a comparison is requested before the documents are arranged."""
    pass


class XmlAssertionError(XmlEquivError, AssertionError):
    """Raised by the default assertion sink when an assertion fails."""
    def __init__(self, label: str):
        super().__init__(f"Assertion failed: {label}")
        self.label = label


class ConfigError(XmlEquivError):
    """Raised when a configuration file is missing or malformed."""
    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.message = message
        self.path = path
