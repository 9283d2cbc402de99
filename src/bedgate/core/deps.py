from __future__ import annotations

from bedgate.core.config import Settings, get_settings
from bedgate.providers.bedrock_runtime import BedrockRuntimeAdapter
from bedgate.providers.transport import Boto3BedrockTransport, build_bedrock_client


def get_bedrock_adapter(settings: Settings | None = None) -> BedrockRuntimeAdapter:
    settings = settings or get_settings()
    client = build_bedrock_client(settings)
    return BedrockRuntimeAdapter(transport=Boto3BedrockTransport(client=client), settings=settings)
