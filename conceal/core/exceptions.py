"""
conceal.core.exceptions
=======================
All custom exceptions for the conceal package.

Structural problems found while walking a record raise a subclass of
ExtractionError. Cipher exceptions are never wrapped: whatever the cipher
raises reaches the caller unchanged.
"""


class ConcealError(Exception):
    """Base class for all conceal exceptions."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message


class ExtractionError(ConcealError):
    """Raised when a value cannot be safely walked for role-annotated fields."""
    pass


class NilValueError(ExtractionError):
    """Raised when the value to extract from is None."""
    pass


class NotPointerError(ExtractionError):
    """
    Raised when the value is not an addressable record.

    Causes:
      - The value has no role declarations at all (int, str, dict, ...)
      - The value is a frozen dataclass, whose members cannot be overwritten
    """
    pass


class DuplicateIDsError(ExtractionError):
    """Raised when more than one identifier member is found in one call tree."""
    pass


class IDNotStringError(ExtractionError):
    """Raised when the identifier member does not hold a str."""
    pass


class BadTagValueError(ExtractionError):
    """Raised when a member is declared with a role other than "id" or "data"."""
    pass


class UnsupportedFieldError(ExtractionError):
    """
    Raised in strict mode when a data member holds a kind that cannot be
    transformed (not text, bytes, a sequence of records or a record).
    """
    pass


class MaxDepthExceededError(ExtractionError):
    """Raised when record nesting goes deeper than the configured max_depth."""
    pass


class DecodeError(ConcealError):
    """
    Raised by reveal() when a text field is not validly encoded, or when
    the decrypted plaintext is not valid text in the configured charset.
    """
    pass


class ConfigError(ConcealError):
    """
    Raised when a configuration is invalid, missing required fields,
    or contains unsupported values.
    """
    pass
