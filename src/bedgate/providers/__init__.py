from bedgate.providers.base import ProviderAdapter
from bedgate.providers.bedrock_runtime import BedrockRuntimeAdapter

__all__ = ["BedrockRuntimeAdapter", "ProviderAdapter"]
