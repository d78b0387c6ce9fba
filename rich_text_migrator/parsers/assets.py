"""
Resource upload transformer.

Turns ``<img src="...">`` elements into Kontent.ai asset references.  The
referenced bytes are downloaded, uploaded through the storage client
held by the :class:`~rich_text_migrator.parsers.context.TransformContext`
and, unless disabled, registered as an asset with a title and an alt
based description.  The element is then replaced by::

    <figure data-asset-id="..."></figure>

Network and storage failures never abort the document: they are sent to
the context's reporter and the element degrades to an empty ``<img/>``.
Repeated occurrences of the same URL are uploaded again each time.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

import requests

from rich_text_migrator.models.nodes import ElementNode
from rich_text_migrator.utils.errors import (
    FetchError,
    MissingSourceAttribute,
    RegistrationError,
    TransformerError,
    UploadError,
)

from .attributes import serialize_attributes
from .context import TransformContext

DEFAULT_CONTENT_TYPE = "application/octet-stream"
UNTITLED_FILENAME = "untitled_file"
DEFAULT_DESCRIPTION = "No description"


@dataclass(frozen=True)
class FetchedResource:
    data: bytes
    content_type: str
    filename: str


def filename_from_url(url: str) -> str:
    """Return the last path segment of ``url`` or a placeholder name."""
    path = urlparse(url).path
    name = unquote(path.rstrip("/").split("/")[-1]) if path else ""
    return name or UNTITLED_FILENAME


def _fetch(url: str, timeout: float) -> FetchedResource:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to download {url}: {e}") from e
    content_type = (resp.headers.get("Content-Type") or "").split(";")[0].strip()
    return FetchedResource(
        data=resp.content,
        content_type=content_type or DEFAULT_CONTENT_TYPE,
        filename=filename_from_url(url),
    )


async def fetch_resource(url: str, *, timeout: float = 30) -> FetchedResource:
    """Download ``url`` without blocking the event loop."""
    return await asyncio.to_thread(_fetch, url, timeout)


def asset_reference(asset_id: str) -> str:
    """Return the rich text marker that embeds the asset ``asset_id``."""
    return f"<figure {serialize_attributes({'data-asset-id': asset_id})}></figure>"


async def _upload(src: str, node: ElementNode, context: TransformContext) -> str:
    fetcher = context.fetcher or fetch_resource
    resource = await fetcher(src)
    file_id = await context.client.upload_bytes(resource.data, resource.content_type, resource.filename)
    if not context.register_assets:
        return file_id
    # the asset can only be registered once its file exists
    return await context.client.register_resource(
        file_id,
        title=resource.filename,
        description=node.attributes.get("alt") or DEFAULT_DESCRIPTION,
        language_codename=context.language_codename,
    )


async def image_transformer(node: ElementNode, children: str, context: TransformContext) -> str:
    """Replace an ``<img>`` with a reference to its uploaded asset, or an empty placeholder on failure."""
    if context.client is None:
        raise TransformerError("Client is not provided")

    src = node.attributes.get("src")
    if not src:
        raise MissingSourceAttribute(node.tag_name, "src")

    try:
        asset_id = await _upload(src, node, context)
    except (FetchError, UploadError, RegistrationError) as e:
        context.reporter("ASSET_UPLOAD", {**context.item, "Url": src}, e)
        return f"<{node.tag_name}/>"

    return asset_reference(asset_id)
