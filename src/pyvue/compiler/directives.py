"""Directive attributes: parsing and execution order."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from pyvue.config import DEFAULT_CONFIG, TemplateConfig
from pyvue.core.dom import Attribute, Element


@dataclass(frozen=True)
class Directive:
    """A directive attribute split into its parts.

    `v-on:click="Save"` -> Directive(kind="v-on", arg="click", value="Save")
    """

    kind: str
    arg: Optional[str]
    value: str

    @classmethod
    def from_attribute(cls, attr: Attribute) -> "Directive":
        kind, sep, arg = attr.key.partition(":")
        return cls(kind=kind, arg=arg if sep else None, value=attr.val)


def is_directive(key: str, config: TemplateConfig = DEFAULT_CONFIG) -> bool:
    return key.startswith(config.prefix)


def order_attributes(
    attrs: List[Attribute], order: Sequence[str] = DEFAULT_CONFIG.ordered_prefixes
) -> List[Attribute]:
    """Reorder attributes so directives run in priority order.

    Attributes starting with an entry of `order` come first, grouped by entry
    in table order. Everything else follows in authored order. Nothing is
    added or dropped.
    """
    buckets: List[List[Attribute]] = [[] for _ in order]
    rest: List[Attribute] = []
    for attr in attrs:
        for i, prefix in enumerate(order):
            if attr.key.startswith(prefix):
                buckets[i].append(attr)
                break
        else:
            rest.append(attr)
    return [attr for bucket in buckets for attr in bucket] + rest


def order_attrs(node: Element, config: TemplateConfig = DEFAULT_CONFIG) -> None:
    """Reorder a node's attributes in place."""
    if node.attrs:
        node.attrs = order_attributes(node.attrs, config.ordered_prefixes)


def pop_directive(
    node: Element, config: TemplateConfig = DEFAULT_CONFIG
) -> Optional[Directive]:
    """Remove and return the first directive attribute of `node`.

    The relative order of the remaining attributes is preserved.
    """
    for i, attr in enumerate(node.attrs):
        if is_directive(attr.key, config):
            del node.attrs[i]
            return Directive.from_attribute(attr)
    return None
