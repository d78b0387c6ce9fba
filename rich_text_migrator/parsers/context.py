from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Mapping, Optional

from rich_text_migrator.models.nodes import ElementNode
from rich_text_migrator.utils.errors import report_error

if TYPE_CHECKING:
    from .assets import FetchedResource

Reporter = Callable[[str, Dict[str, Any], Optional[BaseException]], None]
Fetcher = Callable[[str], Awaitable["FetchedResource"]]


@dataclass(frozen=True)
class TransformContext:
    """
    Collaborators shared by every transformer of one traversal.

    ``client`` is the storage client used by resource transformers (any
    object exposing ``upload_bytes`` and ``register_resource``
    coroutines).  ``fetcher`` downloads referenced resources and defaults
    to :func:`rich_text_migrator.parsers.assets.fetch_resource`.
    ``reporter`` receives recovered per-node failures.  ``item`` labels
    the document being converted in those reports.
    """

    client: Any = None
    fetcher: Optional[Fetcher] = None
    reporter: Reporter = report_error
    item: Dict[str, Any] = field(default_factory=dict)
    language_codename: str = "default"
    register_assets: bool = True


Transformer = Callable[[ElementNode, str, TransformContext], Awaitable[str]]
TransformerRegistry = Mapping[str, Transformer]
