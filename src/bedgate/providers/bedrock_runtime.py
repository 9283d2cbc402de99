from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing

from bedgate.core.config import Settings
from bedgate.core.errors import BedgateError, NoResponseStream, transport_failure
from bedgate.core.logging import LogContext, with_context
from bedgate.core.metrics import bedgate_stream_duration_seconds, bedgate_streams_total, bedgate_tokens_total
from bedgate.domain.chat import Message, OutputEvent, Usage
from bedgate.domain.models import ModelConfig
from bedgate.providers.base import ProviderAdapter
from bedgate.providers.bedrock_request import build_request
from bedgate.providers.bedrock_stream import decode_stream, failure_events
from bedgate.providers.transport import BedrockTransport
from bedgate.routing.resolver import resolve_model, should_use_this_adapter

log = logging.getLogger(__name__)


class BedrockRuntimeAdapter(ProviderAdapter):
    name = "bedrock-runtime"

    def __init__(self, *, transport: BedrockTransport, settings: Settings):
        self._transport = transport
        self._settings = settings

    @classmethod
    def should_use(cls, settings: Settings) -> bool:
        return should_use_this_adapter(settings.api_model_id, settings.use_bedrock_runtime)

    def get_model(self) -> ModelConfig:
        return resolve_model(self._settings.api_model_id)

    async def create_message(self, system_prompt: str, messages: Sequence[Message]) -> AsyncIterator[OutputEvent]:
        model = self.get_model()
        invocation = build_request(
            system_prompt,
            messages,
            model,
            self._settings.aws_use_cross_region_inference,
            self._settings.aws_region,
        )
        logger = with_context(log, LogContext(provider=self.name, model=invocation.model_id))
        logger.info("bedrock.stream.start", extra={"messages": len(messages)})

        started = time.perf_counter()
        status = "ok"
        last_usage: Usage | None = None
        try:
            try:
                frames = await self._transport.invoke_streaming(invocation)
            except Exception as e:
                failure = transport_failure(e)
                logger.exception("bedrock.invoke.error", extra={"detail": failure.detail})
                for event in failure_events(failure.detail):
                    yield event
                raise failure from e

            if frames is None:
                raise NoResponseStream()

            async with aclosing(decode_stream(frames)) as events:
                async for event in events:
                    if isinstance(event, Usage):
                        last_usage = event
                    yield event
        except BedgateError as e:
            status = type(e).__name__
            raise
        except (GeneratorExit, asyncio.CancelledError):
            status = "abandoned"
            raise
        finally:
            elapsed = time.perf_counter() - started
            bedgate_streams_total.labels(model=model.id, status=status).inc()
            bedgate_stream_duration_seconds.labels(model=model.id).observe(elapsed)
            if status == "ok" and last_usage is not None:
                bedgate_tokens_total.labels(model=model.id, direction="input").inc(last_usage.input_tokens)
                bedgate_tokens_total.labels(model=model.id, direction="output").inc(last_usage.output_tokens)
            logger.info(
                "bedrock.stream.done",
                extra={"status": status, "latency_ms": int(elapsed * 1000)},
            )
