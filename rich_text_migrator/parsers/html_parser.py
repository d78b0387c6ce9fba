from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from rich_text_migrator.models.nodes import ElementNode, Node, TextNode

# Content of these elements never reaches the rich text
_DROPPED_TAGS = ("script", "style")
_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction, CData)


def _to_node(element: Union[Tag, NavigableString]) -> Union[Node, None]:
    if isinstance(element, NavigableString):
        if isinstance(element, _SKIPPED_STRINGS):
            return None
        # keep &amp; / &lt; escaped so text can be re-emitted verbatim
        return TextNode(content=element.output_ready(formatter="minimal"))
    if not isinstance(element, Tag):
        return None
    children = [_to_node(child) for child in element.children]
    return ElementNode(
        tag_name=(element.name or "").lower(),
        attributes=dict(element.attrs),
        children=tuple(child for child in children if child is not None),
    )


def parse_html(html: str) -> List[Node]:
    """
    Parse an HTML fragment into the list of its top-level nodes.

    Text nodes keep their markup escaping, attributes keep their source
    order and are always plain strings.  Comments, doctypes and processing
    instructions are discarded along with ``<script>`` and ``<style>``
    elements.  The returned tree is immutable.
    """
    if not html or not html.strip():
        return []

    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

    for bad in soup.find_all(list(_DROPPED_TAGS)):
        bad.decompose()

    nodes: List[Node] = []
    for child in soup.children:
        node = _to_node(child)
        if node is not None:
            nodes.append(node)
    return nodes
