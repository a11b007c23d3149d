"""Template execution settings."""

from dataclasses import dataclass
from typing import Tuple

FOR = "for"
IF = "if"
MODEL = "model"
ON = "on"
BIND = "bind"
HTML = "html"


@dataclass(frozen=True)
class TemplateConfig:
    """Settings shared by every template execution of a component tree.

    Attributes:
        prefix: Attribute-key prefix that marks a directive.
        order: Directive priority table. Attributes matching an earlier entry
            execute first; unmatched attributes keep their authored order
            after all matched ones.
        container: Tag of the neutral element markup fragments are parsed in.
        strict_interpolation: Fail on `{{ name }}` placeholders that do not
            resolve instead of rendering them empty.
        strict_conditionals: Fail on a `v-if` whose field is absent instead
            of treating it as false.
    """

    prefix: str = "v-"
    order: Tuple[str, ...] = (FOR, IF, MODEL, ON, BIND, HTML)
    container: str = "div"
    strict_interpolation: bool = False
    strict_conditionals: bool = False

    @property
    def ordered_prefixes(self) -> Tuple[str, ...]:
        """Attribute-key prefixes in execution order, e.g. `v-for` first."""
        return tuple(self.prefix + name for name in self.order)


DEFAULT_CONFIG = TemplateConfig()
