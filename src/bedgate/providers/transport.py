from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any, Protocol, runtime_checkable

import boto3

from bedgate.core.config import Settings
from bedgate.providers.bedrock_request import BedrockInvocation

log = logging.getLogger(__name__)

DEFAULT_AWS_REGION = "us-east-1"

_EXHAUSTED = object()


@runtime_checkable
class BedrockTransport(Protocol):
    async def invoke_streaming(self, invocation: BedrockInvocation) -> AsyncIterator[bytes | None] | None:
        """Send the request and return the framed response stream, or None when there is none."""
        ...


def build_bedrock_client(settings: Settings) -> Any:
    kwargs: dict[str, Any] = {"region_name": settings.aws_region or DEFAULT_AWS_REGION}
    if settings.aws_access_key:
        kwargs["aws_access_key_id"] = settings.aws_access_key
        kwargs["aws_secret_access_key"] = settings.aws_secret_key or ""
        if settings.aws_session_token:
            kwargs["aws_session_token"] = settings.aws_session_token
    return boto3.client("bedrock-runtime", **kwargs)


async def _iter_chunks(event_stream: Any) -> AsyncIterator[bytes | None]:
    iterator: Iterator[Any] = iter(event_stream)
    try:
        while True:
            event = await asyncio.to_thread(next, iterator, _EXHAUSTED)
            if event is _EXHAUSTED:
                return
            chunk = event.get("chunk") if isinstance(event, dict) else None
            yield chunk.get("bytes") if isinstance(chunk, dict) else None
    finally:
        close = getattr(event_stream, "close", None)
        if close is not None:
            close()


class Boto3BedrockTransport:
    """Transport backed by a boto3 ``bedrock-runtime`` client.

    boto3 is blocking, so the invoke call and every read from the event
    stream run in a worker thread.
    """

    def __init__(self, *, client: Any):
        self._client = client

    async def invoke_streaming(self, invocation: BedrockInvocation) -> AsyncIterator[bytes | None] | None:
        log.debug("bedrock.invoke", extra={"model": invocation.model_id})
        response = await asyncio.to_thread(
            self._client.invoke_model_with_response_stream,
            modelId=invocation.model_id,
            contentType="application/json",
            accept="application/json",
            body=invocation.body_json(),
        )
        event_stream = response.get("body") if response else None
        if event_stream is None:
            return None
        return _iter_chunks(event_stream)
