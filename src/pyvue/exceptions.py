from typing import Any, Optional


class TemplateError(Exception):
    """Base class for every error raised while executing a template."""

    pass


class UnknownDirectiveError(TemplateError):
    """Raised when a `v-` attribute does not name a known directive."""

    def __init__(self, directive: str):
        self.directive = directive
        super().__init__(f"Unknown directive: {directive}")


class UnknownDataFieldError(TemplateError):
    """Raised when a directive references a field missing from the data."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Unknown data field: {field}")


class TypeMismatchError(TemplateError):
    """Raised when a data field does not have the type a directive needs."""

    def __init__(self, field: str, expected: str, actual: Any):
        self.field = field
        self.expected = expected
        self.actual = type(actual).__name__
        super().__init__(
            f"Data field '{field}' is not of type {expected}: {self.actual}"
        )


class SequenceNotFoundError(UnknownDataFieldError):
    def __init__(self, field: str):
        super().__init__(field, f"Sequence not found for field: {field}")


class NotSequenceError(TypeMismatchError):
    def __init__(self, field: str, actual: Any):
        super().__init__(field, "sequence", actual)


class MalformedForExpressionError(TemplateError):
    """Raised when a `v-for` value is not of the form `<var> in <field>`."""

    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Malformed v-for expression: {expression!r}")


class MarkupParseError(TemplateError):
    pass


class InterpolationError(TemplateError):
    """Raised when `{{ }}` substitution fails for a text node."""

    def __init__(self, message: str, text: str = ""):
        self.text = text
        super().__init__(message)
