"""Decoder for Bedrock runtime response streams.

Each frame is one UTF-8 JSON object with a ``type`` discriminator:

* ``message_start``: ``{"message": {"usage": {"input_tokens", "output_tokens"}}}``
* ``content_block_delta``: ``{"delta": {"text": ...}}``
* ``message_delta``: ``{"usage": {"output_tokens": ...}}``
* ``message_stop``: no payload

Token counts reported by the backend are running totals, so the decoder
overwrites its counters instead of summing them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from bedgate.core.errors import NoContentGenerated, transport_failure
from bedgate.domain.chat import OutputEvent, TextDelta, Usage

log = logging.getLogger(__name__)


@dataclass
class DecoderState:
    has_started: bool = False
    input_tokens: int = 0
    output_tokens: int = 0

    def usage(self) -> Usage:
        return Usage(input_tokens=self.input_tokens, output_tokens=self.output_tokens)


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def parse_frame(raw: bytes) -> Mapping[str, Any] | None:
    """Decode one frame; invalid UTF-8 or JSON raises, non-object payloads are ignored."""
    data = json.loads(raw.decode("utf-8"))
    if not isinstance(data, Mapping):
        return None
    return data


def decode_frame(frame: Mapping[str, Any], state: DecoderState) -> OutputEvent | None:
    frame_type = frame.get("type")

    if frame_type == "message_start":
        message = frame.get("message")
        usage = message.get("usage") if isinstance(message, Mapping) else None
        if not isinstance(usage, Mapping):
            return None
        state.input_tokens = _count(usage.get("input_tokens"))
        state.output_tokens = _count(usage.get("output_tokens"))
        return state.usage()

    if frame_type == "content_block_delta":
        delta = frame.get("delta")
        text = delta.get("text") if isinstance(delta, Mapping) else None
        if not isinstance(text, str) or not text:
            return None
        state.has_started = True
        return TextDelta(text=text)

    if frame_type == "message_delta":
        usage = frame.get("usage")
        output_tokens = _count(usage.get("output_tokens")) if isinstance(usage, Mapping) else 0
        if not output_tokens:
            return None
        state.output_tokens = output_tokens
        return state.usage()

    if frame_type == "message_stop":
        return state.usage()

    return None


def failure_events(detail: str) -> list[OutputEvent]:
    """Synthetic events emitted ahead of a transport failure; not model output."""
    return [TextDelta(text=f"Error: {detail}"), Usage(input_tokens=0, output_tokens=0)]


@asynccontextmanager
async def _released(frames: AsyncIterator[Any]):
    try:
        yield frames
    finally:
        aclose = getattr(frames, "aclose", None)
        if aclose is not None:
            await aclose()


async def decode_stream(frames: AsyncIterator[bytes | None]) -> AsyncIterator[OutputEvent]:
    state = DecoderState()
    try:
        async with _released(frames):
            async for raw in frames:
                if not raw:
                    continue
                frame = parse_frame(raw)
                if frame is None:
                    continue
                event = decode_frame(frame, state)
                if event is not None:
                    yield event
    except Exception as e:
        failure = transport_failure(e)
        log.exception("bedrock.stream.error", extra={"detail": failure.detail})
        for event in failure_events(failure.detail):
            yield event
        raise failure from e

    if not state.has_started:
        raise NoContentGenerated()
