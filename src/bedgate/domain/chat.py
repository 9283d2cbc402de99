from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageBlock(BaseModel):
    """Image reference: a URL / s3 uri string or a provider source mapping."""

    type: Literal["image"] = "image"
    source: str | dict[str, Any]


class ToolUseBlock(BaseModel):
    type: Literal["tool_use"] = "tool_use"
    name: str
    id: str | None = None
    input: dict[str, Any] = Field(default_factory=dict)


class UnknownBlock(BaseModel):
    """Any block whose tag is not recognized (tool_result, document, ...)."""

    model_config = ConfigDict(extra="allow")

    type: str = "unknown"


_KNOWN_BLOCK_TAGS = frozenset({"text", "image", "tool_use"})


def _block_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if isinstance(value, UnknownBlock) or tag not in _KNOWN_BLOCK_TAGS:
        return "unknown"
    return tag


ContentBlock = Annotated[
    Union[
        Annotated[TextBlock, Tag("text")],
        Annotated[ImageBlock, Tag("image")],
        Annotated[ToolUseBlock, Tag("tool_use")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_block_tag),
]


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: str | list[ContentBlock]


class TextDelta(BaseModel):
    type: Literal["text"] = "text"
    text: str


class Usage(BaseModel):
    type: Literal["usage"] = "usage"
    input_tokens: int = 0
    output_tokens: int = 0


OutputEvent = Annotated[Union[TextDelta, Usage], Field(discriminator="type")]
