"""Error types raised while decomposing and formatting durations."""

from __future__ import annotations


class DurfmtError(Exception):
    """Base class for all recoverable durfmt errors."""


class DecomposeError(DurfmtError):
    """The source value could not be turned into signed seconds."""


class TemplateError(DurfmtError, ValueError):
    """A template could not be validated or rendered."""

    def __init__(self, message: str, template: str, position: int | None = None):
        super().__init__(message)
        self.template = template
        self.position = position


class UnexpectedDelimiterError(TemplateError):
    def __init__(self, template: str, position: int):
        super().__init__(
            f"Template ends with an unescaped '%' at position {position}: {template!r}",
            template,
            position,
        )


class UnknownFieldError(TemplateError):
    def __init__(self, template: str, position: int, field: str):
        super().__init__(
            f"Unknown field '%{field}' at position {position}: {template!r}",
            template,
            position,
        )
        self.field = field


class ValueOutOfRangeError(TemplateError):
    def __init__(self, template: str, position: int, field: str):
        super().__init__(
            f"Value for '%{field}' is too large to represent",
            template,
            position,
        )
        self.field = field


class RenderError(DurfmtError):
    """The output stream failed while a rendered duration was written."""
