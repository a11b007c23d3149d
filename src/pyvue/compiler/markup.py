"""Markup parsing and serialisation.

Parsing goes through lxml's HTML parser; its elements are mapped onto the
mutable `Element`/`Text` tree the template engine rewrites in place.
"""

from typing import Any, List

from lxml import etree
from lxml import html as lxml_html

from pyvue.config import DEFAULT_CONFIG
from pyvue.core.dom import Attribute, Element, Node, Text
from pyvue.exceptions import MarkupParseError

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


def parse_nodes(markup: str, container: str = DEFAULT_CONFIG.container) -> List[Node]:
    """Parse a markup fragment into top-level nodes.

    The fragment is parsed inside a neutral `container` element so that no
    tag-specific reparenting applies to the top level. Blank leading text is
    not kept, so blank markup yields no nodes.

    lxml recovers from most malformed markup (stray end tags, bare `<`);
    `MarkupParseError` is raised only for what it reports as a parser error.
    """
    if not markup.strip():
        return []
    try:
        wrapper = lxml_html.fragment_fromstring(markup, create_parent=container)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        raise MarkupParseError(f"Parser error: {e}") from e

    root = Element(tag="")
    _map_children(wrapper, root)
    nodes = list(root.children)
    for node in nodes:
        root.remove_child(node)
    return nodes


def parse_node(markup: str, container: str = DEFAULT_CONFIG.container) -> Element:
    """Parse a template into a synthetic root element.

    The root has an empty tag and is never rendered itself.
    """
    root = Element(tag="")
    for node in parse_nodes(markup, container):
        root.append_child(node)
    return root


def _map_children(source: Any, target: Element) -> None:
    if source.text:
        target.append_child(Text(source.text))
    for child in source:
        # Comments and processing instructions have a non-string tag
        if isinstance(child.tag, str):
            target.append_child(_map_node(child))
        if child.tail:
            _append_text(target, child.tail)


def _map_node(source: Any) -> Element:
    node = Element(
        tag=source.tag,
        attrs=[Attribute(str(k), str(v)) for k, v in source.attrib.items()],
    )
    _map_children(source, node)
    return node


def _append_text(target: Element, data: str) -> None:
    # Merge with a preceding text node left behind by a dropped comment
    last = target.children[-1] if target.children else None
    if isinstance(last, Text):
        last.data += data
    else:
        target.append_child(Text(data))


def _escape(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("'", "&#39;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&#34;")
        .replace("\r", "&#13;")
    )


def render(node: Node) -> str:
    """Serialise a node, keeping attribute and child order."""
    parts: List[str] = []
    _render(node, parts, raw=False)
    return "".join(parts)


def render_children(node: Element) -> str:
    """Serialise the children of a node, e.g. a synthetic root."""
    parts: List[str] = []
    raw = node.tag in RAW_TEXT_ELEMENTS
    for child in node.children:
        _render(child, parts, raw=raw)
    return "".join(parts)


def _render(node: Node, parts: List[str], raw: bool) -> None:
    if isinstance(node, Text):
        parts.append(node.data if raw else _escape(node.data))
        return

    if not node.tag:
        for child in node.children:
            _render(child, parts, raw=False)
        return

    parts.append(f"<{node.tag}")
    for attr in node.attrs:
        parts.append(f' {attr.key}="{_escape(attr.val)}"')
    parts.append(">")

    if node.tag in VOID_ELEMENTS:
        return

    child_raw = node.tag in RAW_TEXT_ELEMENTS
    for child in node.children:
        _render(child, parts, raw=child_raw)
    parts.append(f"</{node.tag}>")
