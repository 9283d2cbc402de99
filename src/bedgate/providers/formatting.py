from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from bedgate.domain.chat import ImageBlock, TextBlock, ToolUseBlock

UNKNOWN_BLOCK_PLACEHOLDER = "[Unknown Block]"


def _image_reference(source: str | dict[str, Any]) -> str:
    if isinstance(source, str):
        return source
    for key in ("url", "uri", "media_type", "type"):
        value = source.get(key)
        if value:
            return str(value)
    return "unknown"


def format_block(block: Any) -> str:
    if isinstance(block, TextBlock):
        return block.text
    if isinstance(block, ImageBlock):
        return f"[Image: {_image_reference(block.source)}]"
    if isinstance(block, ToolUseBlock):
        return f"[Tool: {block.name}]"
    return UNKNOWN_BLOCK_PLACEHOLDER


def format_content(blocks: Sequence[Any]) -> str:
    """Flatten structured content into one string, one fragment per block."""
    return " ".join(format_block(block) for block in blocks)
