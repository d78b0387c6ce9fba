from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class TextNode(BaseModel):
    """Leaf of a parsed tree; ``content`` is already markup-escaped text."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    content: str


class ElementNode(BaseModel):
    """Element with its attributes (in source order) and owned children."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["tag"] = "tag"
    tag_name: str = Field(..., alias="tagName", min_length=1)
    attributes: Dict[str, Optional[str]] = Field(default_factory=dict)
    children: Tuple["Node", ...] = ()


Node = Annotated[Union[TextNode, ElementNode], Field(discriminator="type")]

ElementNode.model_rebuild()
