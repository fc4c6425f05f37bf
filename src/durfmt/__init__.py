"""durfmt: break durations down into years, days and clock fields and render them."""

__version__ = "0.1.0"

from durfmt.adapters import Decompose, decompose, decompose_count  # noqa: E402
from durfmt.decomposed import DecomposedTime, Sign, decompose_seconds  # noqa: E402
from durfmt.errors import (  # noqa: E402
    DecomposeError,
    DurfmtError,
    RenderError,
    TemplateError,
    UnexpectedDelimiterError,
    UnknownFieldError,
    ValueOutOfRangeError,
)
from durfmt.formatting import (  # noqa: E402
    DurationFormat,
    Template,
    display,
    format_duration,
    make_format,
    validate_template,
)
