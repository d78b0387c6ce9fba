"""
Async, order-preserving tree walk producing rich text markup.

Children of an element are resolved before the element itself and may
run concurrently (image uploads dominate the wall-clock time), but their
markup is always joined in document order.  Errors raised by a
transformer are not caught here: they abort the whole conversion.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from rich_text_migrator.models.nodes import Node, TextNode

from .context import TransformContext, TransformerRegistry
from .html_parser import parse_html
from .transformers import resolve_transformer


async def _join(nodes: Iterable[Node], registry: TransformerRegistry, context: TransformContext) -> str:
    # gather returns results in argument order, not completion order
    parts = await asyncio.gather(*(traverse(node, registry, context) for node in nodes))
    return "".join(parts)


async def traverse(node: Node, registry: TransformerRegistry, context: TransformContext) -> str:
    """Resolve ``node`` and its subtree into a single markup string."""
    if isinstance(node, TextNode):
        return node.content
    children = await _join(node.children, registry, context)
    transformer = resolve_transformer(registry, node.tag_name)
    return await transformer(node, children, context)


async def nodes_to_html(nodes: Iterable[Node], registry: TransformerRegistry, context: TransformContext) -> str:
    """Resolve a fragment of sibling nodes and concatenate their markup in order."""
    return await _join(nodes, registry, context)


def convert_html(html: str, registry: TransformerRegistry, context: TransformContext) -> str:
    """Parse ``html`` and run the async conversion to completion."""
    return asyncio.run(nodes_to_html(parse_html(html), registry, context))
