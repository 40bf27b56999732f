"""
Exception hierarchy for scriptshift.

Every failure raised by the library derives from TransliterationError so
callers can layer their own fallback policy around a single type.
"""


class TransliterationError(Exception):
    """Base exception for all scriptshift errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class SchemaNotFound(TransliterationError):
    """A schema could not be located from the given reference."""

    pass


class InvalidIdentifier(SchemaNotFound):
    """Empty or unresolvable path, or unknown catalog identifier."""

    pass


class ResourceNotFound(SchemaNotFound):
    """No bytes exist for a normalized resource path."""

    pass


class ParseError(TransliterationError):
    """Schema document bytes do not form a valid schema document."""

    def __init__(self, message: str, errors: list[str] | None = None, code: str | None = None):
        super().__init__(message, code)
        self.errors = list(errors or [])


class StartupInvariantViolation(TransliterationError):
    """The schema catalog is inconsistent (duplicate canonical paths)."""

    pass


class InvalidSeparator(TransliterationError):
    """A word separator pattern is not a valid regular expression."""

    pass


class ConfigurationError(TransliterationError):
    """Settings file missing or malformed."""

    pass
