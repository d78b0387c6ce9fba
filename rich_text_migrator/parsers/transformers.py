"""
Async transformers rewriting HTML elements into Kontent.ai rich text.

Each transformer receives the element, the already resolved markup of
its children and the shared :class:`TransformContext`, and returns the
markup for the whole element.  Elements without a registered
transformer go through :func:`default_transformer`, which re-emits the
tag with its allowed attributes only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from rich_text_migrator.models.nodes import ElementNode

from .assets import image_transformer
from .attributes import format_attributes
from .context import TransformContext, Transformer, TransformerRegistry

DEFAULT_KEY = "default"


async def default_transformer(node: ElementNode, children: str, context: TransformContext) -> str:
    """Re-emit the element with its allowed attributes around the resolved children."""
    attrs = format_attributes(node.attributes)
    opening = f"{node.tag_name} {attrs}" if attrs else node.tag_name
    return f"<{opening}>{children}</{node.tag_name}>"


def rename_tag(tag_name: str) -> Transformer:
    """Build a transformer that swaps the element name and keeps its allowed attributes."""

    async def transformer(node: ElementNode, children: str, context: TransformContext) -> str:
        return await default_transformer(node.model_copy(update={"tag_name": tag_name}), children, context)

    transformer.__name__ = f"rename_to_{tag_name}"
    return transformer


BUILTIN_TRANSFORMERS: Dict[str, Transformer] = {
    "i": rename_tag("em"),
    "b": rename_tag("strong"),
}


def resolve_transformer(registry: TransformerRegistry, tag_name: str) -> Transformer:
    transformer = registry.get(tag_name)
    if transformer is None:
        transformer = registry.get(DEFAULT_KEY, default_transformer)
    return transformer


def build_registry(
    *,
    upload_assets: bool = True,
    extra: Optional[Mapping[str, Transformer]] = None,
) -> TransformerRegistry:
    """
    Assemble the read-only registry used for one migration.

    :param upload_assets: Register :func:`image_transformer` for ``img``.
                          Disabled for dry runs, where images are then
                          re-emitted by the default transformer.
    :param extra: Caller transformers, overriding the built-in ones.  The
                  ``"default"`` key replaces the default transformer.
    """
    registry: Dict[str, Transformer] = dict(BUILTIN_TRANSFORMERS)
    if upload_assets:
        registry["img"] = image_transformer
    if extra:
        registry.update(extra)
    return MappingProxyType(registry)
