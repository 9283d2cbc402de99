from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_tokens: int | None = None
    context_window: int | None = None
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: float | None = Field(default=None, description="USD per 1M input tokens")
    output_price: float | None = Field(default=None, description="USD per 1M output tokens")
    description: str | None = None


class ModelConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Bedrock model id, without any cross-region prefix")
    info: ModelInfo


BEDROCK_DEFAULT_MODEL_ID = "anthropic.claude-3-5-sonnet-20241022-v2:0"

BEDROCK_MODELS: Mapping[str, ModelInfo] = MappingProxyType(
    {
        "anthropic.claude-3-5-sonnet-20241022-v2:0": ModelInfo(
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=3.0,
            output_price=15.0,
        ),
        "anthropic.claude-3-5-haiku-20241022-v1:0": ModelInfo(
            max_tokens=8192,
            context_window=200_000,
            supports_images=False,
            supports_prompt_cache=False,
            input_price=1.0,
            output_price=5.0,
        ),
        "anthropic.claude-3-5-sonnet-20240620-v1:0": ModelInfo(
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=3.0,
            output_price=15.0,
        ),
        "anthropic.claude-3-opus-20240229-v1:0": ModelInfo(
            max_tokens=4096,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=15.0,
            output_price=75.0,
        ),
        "anthropic.claude-3-sonnet-20240229-v1:0": ModelInfo(
            max_tokens=4096,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=3.0,
            output_price=15.0,
        ),
        "anthropic.claude-3-haiku-20240307-v1:0": ModelInfo(
            max_tokens=4096,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=0.25,
            output_price=1.25,
        ),
        "amazon.nova-pro-v1:0": ModelInfo(
            max_tokens=5000,
            context_window=300_000,
            supports_images=True,
            supports_prompt_cache=True,
            input_price=0.8,
            output_price=3.2,
            description="Amazon Nova Pro: multimodal, balanced accuracy and speed",
        ),
        "amazon.nova-lite-v1:0": ModelInfo(
            max_tokens=5000,
            context_window=300_000,
            supports_images=True,
            supports_prompt_cache=True,
            input_price=0.06,
            output_price=0.24,
            description="Amazon Nova Lite: low-cost multimodal",
        ),
        "amazon.nova-micro-v1:0": ModelInfo(
            max_tokens=5000,
            context_window=128_000,
            supports_images=False,
            supports_prompt_cache=False,
            input_price=0.035,
            output_price=0.14,
            description="Amazon Nova Micro: text only, lowest latency",
        ),
    }
)
