"""
Pydantic models shared by the parsers and the Kontent.ai client.

* :mod:`rich_text_migrator.models.nodes` – the immutable parsed-HTML tree
* :mod:`rich_text_migrator.models.kontent` – Management API request bodies
"""

from .kontent import AssetPayload, ContentItemPayload, LanguageVariantPayload
from .nodes import ElementNode, Node, TextNode

__all__ = [
    "AssetPayload",
    "ContentItemPayload",
    "ElementNode",
    "LanguageVariantPayload",
    "Node",
    "TextNode",
]
