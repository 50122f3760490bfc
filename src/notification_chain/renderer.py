"""Jinja2 rendering for plain-text channel transcripts."""

import re
from typing import Any

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

_LINE_BREAKS = re.compile(r"[\r\n]+")


def header_value(value: Any) -> str:
    """Collapse line breaks so a value cannot start a new transcript header."""
    return _LINE_BREAKS.sub(" ", str(value)).strip()


_env = SandboxedEnvironment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)
_env.filters["header"] = header_value


def render_template(template_str: str, context: dict[str, Any]) -> str:
    """Render a transcript template with the given context.

    Values are converted to strings before rendering. Header lines should
    pipe their values through the ``header`` filter.
    """
    str_context = {k: str(v) for k, v in context.items()}
    return _env.from_string(template_str).render(str_context)
