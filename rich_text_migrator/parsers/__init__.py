"""
Parsers and converters used by the migration pipeline.

This subpackage turns raw HTML into an immutable node tree
(:func:`parse_html`) and walks that tree with async transformers into
Kontent.ai rich text (:func:`nodes_to_html`), uploading images on the way.
"""

from .assets import FetchedResource, fetch_resource, image_transformer
from .attributes import ALLOWED_ATTRIBUTES, filter_attributes, format_attributes, serialize_attributes
from .context import TransformContext, Transformer, TransformerRegistry
from .html_parser import parse_html
from .transformers import build_registry, default_transformer
from .traversal import convert_html, nodes_to_html, traverse

__all__ = [
    "ALLOWED_ATTRIBUTES",
    "FetchedResource",
    "TransformContext",
    "Transformer",
    "TransformerRegistry",
    "build_registry",
    "convert_html",
    "default_transformer",
    "fetch_resource",
    "filter_attributes",
    "format_attributes",
    "image_transformer",
    "nodes_to_html",
    "parse_html",
    "serialize_attributes",
    "traverse",
]
