from __future__ import annotations

import argparse
import asyncio
import sys

from bedgate.core.config import get_settings
from bedgate.core.deps import get_bedrock_adapter
from bedgate.core.errors import BedgateError
from bedgate.core.logging import configure_logging
from bedgate.domain.chat import Message, TextDelta, Usage
from bedgate.providers.base import ProviderAdapter


async def stream_prompt(adapter: ProviderAdapter, *, system_prompt: str, prompt: str) -> Usage | None:
    usage: Usage | None = None
    async for event in adapter.create_message(system_prompt, [Message(role="user", content=prompt)]):
        if isinstance(event, TextDelta):
            sys.stdout.write(event.text)
            sys.stdout.flush()
        elif isinstance(event, Usage):
            usage = event
    sys.stdout.write("\n")
    return usage


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="bedgate", description="Stream one prompt through the Bedrock runtime adapter")
    p.add_argument("prompt", help="User message to send")
    p.add_argument("--system", default="You are a helpful assistant.", help="System prompt")
    p.add_argument("--model", default=None, help="Override API_MODEL_ID")
    p.add_argument("--region", default=None, help="Override AWS_REGION")
    p.add_argument("--cross-region", action="store_true", help="Enable cross-region inference prefixes")
    args = p.parse_args(argv)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.model:
        overrides["api_model_id"] = args.model
    if args.region:
        overrides["aws_region"] = args.region
    if args.cross_region:
        overrides["aws_use_cross_region_inference"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(level=settings.bedgate_log_level)
    adapter = get_bedrock_adapter(settings)

    try:
        usage = asyncio.run(stream_prompt(adapter, system_prompt=args.system, prompt=args.prompt))
    except BedgateError as e:
        print(f"error: {e.detail}", file=sys.stderr)
        return 1

    if usage is not None:
        print(f"usage: input={usage.input_tokens} output={usage.output_tokens}", file=sys.stderr)
    return 0
