from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field

from bedgate.domain.chat import Message
from bedgate.domain.models import ModelConfig
from bedgate.providers.formatting import format_content
from bedgate.routing.resolver import apply_routing_prefix, is_nova_family

BEDROCK_PROTOCOL_VERSION = "bedrock-2024-02-20"
DEFAULT_MAX_TOKENS = 8192


class WireMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class PromptRouting(BaseModel):
    enable_routing: bool = True
    temperature: float = 0


class CacheControl(BaseModel):
    enable_prompt_caching: bool = True
    prompt_routing: PromptRouting = Field(default_factory=PromptRouting)


class NovaConfig(BaseModel):
    optimized_response: bool = True
    context_adaptation: bool = True


class BedrockRequest(BaseModel):
    anthropic_version: str = BEDROCK_PROTOCOL_VERSION
    messages: list[WireMessage]
    system: str
    max_tokens: int
    temperature: float = 0
    cache_control: CacheControl | None = None
    nova_config: NovaConfig | None = None

    def to_wire(self) -> dict[str, Any]:
        # Unset extensions are left out of the body entirely, never sent as null.
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class BedrockInvocation:
    model_id: str
    body: BedrockRequest

    def body_json(self) -> str:
        return json.dumps(self.body.to_wire(), ensure_ascii=False)


def to_wire_message(message: Message) -> WireMessage:
    if isinstance(message.content, str):
        content = message.content
    else:
        content = format_content(message.content)
    return WireMessage(role=message.role, content=content)


def build_request(
    system_prompt: str,
    messages: Sequence[Message],
    model: ModelConfig,
    cross_region_enabled: bool,
    region_hint: str | None,
) -> BedrockInvocation:
    body = BedrockRequest(
        messages=[to_wire_message(m) for m in messages],
        system=system_prompt,
        max_tokens=model.info.max_tokens or DEFAULT_MAX_TOKENS,
    )
    if is_nova_family(model.id):
        body.nova_config = NovaConfig()
        if model.info.supports_prompt_cache:
            body.cache_control = CacheControl()

    return BedrockInvocation(
        model_id=apply_routing_prefix(model.id, region_hint, cross_region_enabled),
        body=body,
    )
