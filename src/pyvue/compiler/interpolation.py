"""`{{ expr }}` substitution for text nodes, backed by Jinja2."""

from functools import lru_cache
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateError, Undefined

from pyvue.core.data import stringify
from pyvue.exceptions import InterpolationError


def _finalize(value: Any) -> Any:
    # Same text form as bound attributes: true/false, None as empty.
    if value is None or isinstance(value, bool):
        return stringify(value)
    return value


# Escaping happens once, when the tree is serialised.
_env = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=Undefined,
    finalize=_finalize,
)
_strict_env = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
    finalize=_finalize,
)


@lru_cache(maxsize=512)
def _compile(text: str, strict: bool) -> Template:
    env = _strict_env if strict else _env
    return env.from_string(text)


def has_placeholders(text: str) -> bool:
    return "{{" in text


def interpolate(text: str, context: Mapping[str, Any], strict: bool = False) -> str:
    """Render the double-brace placeholders of `text` against `context`.

    Unresolved names render as an empty string unless `strict` is set.
    Text without placeholders is returned unchanged.
    """
    if not has_placeholders(text):
        return text
    try:
        return _compile(text, strict).render(dict(context))
    except TemplateError as e:
        raise InterpolationError(f"Cannot interpolate {text.strip()!r}: {e}", text) from e
    except Exception as e:
        raise InterpolationError(
            f"Error evaluating {text.strip()!r}: {type(e).__name__}: {e}", text
        ) from e
