"""
Custom exceptions for the quiz service.

Parse, validation and provider errors are raised inside the generation core
and absorbed there; only configuration and session errors reach callers.
"""


class QuizAIException(Exception):
    """Base exception for all quiz service errors."""
    pass


class JSONParseError(QuizAIException):
    """Raised when model output cannot be decoded into a JSON object."""

    def __init__(self, message: str, raw_text: str = None):
        self.raw_text = raw_text
        super().__init__(message)


class StructureValidationError(QuizAIException):
    """Raised when decoded output does not match the required structure."""

    def __init__(self, message: str, errors: list = None):
        self.errors = errors or []
        super().__init__(message)


class ProviderError(QuizAIException):
    """Raised when a provider call fails or returns an unusable envelope."""

    def __init__(self, message: str, provider: str = None):
        self.provider = provider
        super().__init__(message)


class ConfigurationError(QuizAIException):
    """Raised when generation policy settings are invalid."""
    pass


class QuizStateError(QuizAIException):
    """Raised on an invalid quiz session transition."""
    pass
