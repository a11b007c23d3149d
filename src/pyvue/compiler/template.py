"""Template execution: directive expansion and text interpolation.

Execution walks the parsed tree depth first and rewrites it in place. Each
element first has its attributes reordered so that structural directives
(`v-for`, `v-if`) run before the others, then its directives are consumed
one at a time. A structural directive replaces or removes the element and
reports where the walk resumes; the element itself is never visited again.
Once the whole tree is expanded, a second pass renders `{{ }}` placeholders
in text nodes.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from pyvue.compiler.directives import Directive, order_attrs, pop_directive
from pyvue.compiler.interpolation import interpolate
from pyvue.compiler.markup import parse_node, parse_nodes, render
from pyvue.config import BIND, FOR, HTML, IF, MODEL, ON
from pyvue.core.data import DataContext, stringify
from pyvue.core.dom import Attribute, Element, Node, Text
from pyvue.exceptions import MalformedForExpressionError, UnknownDirectiveError
from pyvue.runtime.events import MODEL_EVENT, v_model, v_on

if TYPE_CHECKING:
    from pyvue.runtime.component import Component

logger = logging.getLogger(__name__)

_FOR_SPLIT = re.compile(r"\s+in\s+")


@dataclass(frozen=True)
class StructuralChange:
    """The current node was replaced or removed; continue at `resume_at`."""

    resume_at: Optional[Node]


def parse_for(expression: str) -> Tuple[str, str]:
    """Split `"<var> in <field>"` into its two names."""
    parts = _FOR_SPLIT.split(expression.strip(), maxsplit=1)
    if len(parts) != 2:
        raise MalformedForExpressionError(expression)
    name, field = parts[0].strip(), parts[1].strip()
    if not name or not field:
        raise MalformedForExpressionError(expression)
    return name, field


def replace_name(value: str, name: str, key: str) -> str:
    """Replace `name` where it stands as a whole token.

    Longer identifiers containing `name` (`Items` for `Item`) and hyphenated
    words (`x-y` for `x`) are left alone.
    """
    pattern = r"(?<![\w-])" + re.escape(name) + r"(?![\w-])"
    return re.sub(pattern, lambda _: key, value)


def rename(node: Node, name: str, key: str) -> None:
    """Rename a loop variable in the attribute values and text under `node`.

    Tag and attribute names are never touched.
    """
    if isinstance(node, Text):
        node.data = replace_name(node.data, name, key)
        return
    node.attrs = [
        Attribute(attr.key, replace_name(attr.val, name, key)) for attr in node.attrs
    ]
    for child in node.children:
        rename(child, name, key)


def execute_text(node: Node, data: DataContext, strict: bool = False) -> None:
    """Render the placeholders of every non-blank text node under `node`."""
    if isinstance(node, Text):
        if not node.data.strip():
            return
        node.data = interpolate(node.data, data, strict=strict)
        return
    for child in node.children:
        execute_text(child, data, strict)


class Template:
    """One execution of a component's template."""

    def __init__(self, comp: "Component") -> None:
        self.comp = comp
        self.config = comp.config
        self.id = 0

    def execute(self, data: Optional[DataContext] = None) -> Element:
        """Execute the template against `data` and return the synthetic root.

        Loop expansion adds synthetic keys to `data`. Any error aborts the
        whole execution.
        """
        if data is None:
            data = self.comp.context()
        self.id = 0
        logger.debug("Executing %r", self.comp)

        node = parse_node(self.comp.template, self.config.container)
        self.execute_element(node, data)
        execute_text(node, data, self.config.strict_interpolation)
        return node

    def next_key(self, name: str, data: DataContext) -> str:
        """Unique context key for one loop iteration of `name`."""
        while True:
            key = f"{name}{self.id}"
            self.id += 1
            if key not in data:
                return key

    def execute_element(self, node: Node, data: DataContext) -> Optional[Node]:
        """Execute `node` and its subtree; return the next node to execute."""
        # Text is left for the interpolation pass.
        if not isinstance(node, Element):
            return node.next_sibling

        sub = self.comp.new_sub(node.tag) if node.tag else None

        order_attrs(node, self.config)
        change = self.execute_attrs(node, sub, data)
        # The current node is no longer valid in favor of the resumption node.
        if change is not None:
            return change.resume_at

        if sub is not None:
            return self.execute_sub(node, sub)

        child = node.first_child
        while child is not None:
            child = self.execute_element(child, data)

        return node.next_sibling

    def execute_attrs(
        self, node: Element, sub: Optional["Component"], data: DataContext
    ) -> Optional[StructuralChange]:
        """Consume the directives of `node` one at a time."""
        while True:
            directive = pop_directive(node, self.config)
            if directive is None:
                return None
            change = self.execute_attr(node, sub, directive, data)
            if change is not None:
                return change

    def execute_attr(
        self,
        node: Element,
        sub: Optional["Component"],
        directive: Directive,
        data: DataContext,
    ) -> Optional[StructuralChange]:
        name = directive.kind[len(self.config.prefix) :]
        if name == BIND:
            self.execute_bind(node, sub, directive.arg or "", directive.value, data)
        elif name == FOR:
            return self.execute_for(node, directive.value, data)
        elif name == HTML:
            self.execute_html(node, directive.value, data)
        elif name == IF:
            return self.execute_if(node, directive.value, data)
        elif name == MODEL:
            self.execute_model(node, directive.value, data)
        elif name == ON:
            self.execute_on(node, directive.arg or "", directive.value)
        else:
            raise UnknownDirectiveError(directive.kind)
        return None

    def execute_bind(
        self,
        node: Element,
        sub: Optional["Component"],
        key: str,
        field: str,
        data: DataContext,
    ) -> None:
        value = data.lookup(field)

        if sub is not None:
            prop = sub.resolve_prop(key)
            if prop is not None:
                sub.props[prop] = value
                return

        # A false boolean removes the attribute.
        if value is False:
            return

        node.add_attr(key, stringify(value))

    def execute_for(
        self, node: Element, expression: str, data: DataContext
    ) -> StructuralChange:
        name, field = parse_for(expression)
        values = data.get_sequence(field)

        elem = render(node)
        nodes: List[Node] = []
        for value in values:
            key = self.next_key(name, data)
            for copy in parse_nodes(elem, self.config.container):
                rename(copy, name, key)
                nodes.append(copy)
            data[key] = value

        logger.debug("Expanded v-for %r into %d node(s)", expression, len(nodes))
        parent = node.require_parent()
        next_node = node.next_sibling
        for child in nodes:
            parent.insert_before(child, node)
        parent.remove_child(node)
        # The first copy is the next node to execute.
        return StructuralChange(nodes[0] if nodes else next_node)

    def execute_html(self, node: Element, field: str, data: DataContext) -> None:
        markup = data.get_str(field)
        for child in parse_nodes(markup, self.config.container):
            node.append_child(child)

    def execute_if(
        self, node: Element, field: str, data: DataContext
    ) -> Optional[StructuralChange]:
        if self.config.strict_conditionals:
            data.lookup(field)
        if data.get(field) is True:
            return None
        next_node = node.next_sibling
        node.detach()
        return StructuralChange(next_node)

    def execute_model(self, node: Element, field: str, data: DataContext) -> None:
        value = data.get_str(field)
        node.add_attr(MODEL_EVENT, field)
        node.add_attr("value", value)
        self.comp.events.add_event_listener(MODEL_EVENT, v_model)

    def execute_on(self, node: Element, event: str, method: str) -> None:
        node.add_attr(event, method)
        self.comp.events.add_event_listener(event, v_on)

    def execute_sub(self, node: Element, sub: "Component") -> Optional[Node]:
        """Replace a subcomponent placeholder with the subcomponent's output."""
        logger.debug("Expanding <%s> with props %r", node.tag, sorted(sub.props))
        sub_node = Template(sub).execute()

        parent = node.require_parent()
        for child in list(sub_node.children):
            sub_node.remove_child(child)
            parent.insert_before(child, node)
        next_node = node.next_sibling
        parent.remove_child(node)
        return next_node
