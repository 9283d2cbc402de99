from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from bedgate.core.config import Settings
from bedgate.domain.chat import Message
from bedgate.domain.models import ModelConfig, ModelInfo
from bedgate.providers.bedrock_request import build_request
from bedgate.providers.transport import Boto3BedrockTransport, build_bedrock_client


class FakeEventStream:
    def __init__(self, events: list[dict]) -> None:
        self._events = events
        self.closed = False

    def __iter__(self):
        return iter(self._events)

    def close(self) -> None:
        self.closed = True


def _invocation():
    model = ModelConfig(id="amazon.nova-micro-v1:0", info=ModelInfo(max_tokens=5000))
    return build_request("sys", [Message(role="user", content="hi")], model, True, "us-west-2")


@pytest.mark.asyncio
async def test_boto3_transport_invokes_with_json_body_and_yields_chunk_bytes() -> None:
    event_stream = FakeEventStream(
        [
            {"chunk": {"bytes": b'{"type": "message_start"}'}},
            {"metadata": {}},
            {"chunk": {"bytes": b'{"type": "message_stop"}'}},
        ]
    )
    client = MagicMock()
    client.invoke_model_with_response_stream.return_value = {"body": event_stream}

    transport = Boto3BedrockTransport(client=client)
    frames = await transport.invoke_streaming(_invocation())
    assert frames is not None
    chunks = [c async for c in frames]

    assert chunks == [b'{"type": "message_start"}', None, b'{"type": "message_stop"}']
    assert event_stream.closed

    kwargs = client.invoke_model_with_response_stream.call_args.kwargs
    assert kwargs["modelId"] == "us.amazon.nova-micro-v1:0"
    assert kwargs["contentType"] == "application/json"
    assert kwargs["accept"] == "application/json"
    body = json.loads(kwargs["body"])
    assert body["anthropic_version"] == "bedrock-2024-02-20"
    assert body["messages"] == [{"role": "user", "content": "hi"}]
    assert "nova_config" in body


@pytest.mark.asyncio
async def test_boto3_transport_returns_none_without_body() -> None:
    client = MagicMock()
    client.invoke_model_with_response_stream.return_value = {"ResponseMetadata": {}}

    transport = Boto3BedrockTransport(client=client)
    assert await transport.invoke_streaming(_invocation()) is None


@pytest.mark.asyncio
async def test_boto3_transport_closes_event_stream_when_abandoned() -> None:
    event_stream = FakeEventStream([{"chunk": {"bytes": b"{}"}}, {"chunk": {"bytes": b"{}"}}])
    client = MagicMock()
    client.invoke_model_with_response_stream.return_value = {"body": event_stream}

    frames = await Boto3BedrockTransport(client=client).invoke_streaming(_invocation())
    assert frames is not None
    await frames.__anext__()
    await frames.aclose()

    assert event_stream.closed


def test_build_bedrock_client_with_static_credentials() -> None:
    settings = Settings(
        _env_file=None,
        aws_access_key="AKIA",
        aws_secret_key="secret",
        aws_session_token="token",
        aws_region="eu-west-1",
    )
    with patch("bedgate.providers.transport.boto3.client") as client_factory:
        build_bedrock_client(settings)

    client_factory.assert_called_once_with(
        "bedrock-runtime",
        region_name="eu-west-1",
        aws_access_key_id="AKIA",
        aws_secret_access_key="secret",
        aws_session_token="token",
    )


def test_build_bedrock_client_defaults_region_and_credential_chain() -> None:
    settings = Settings(_env_file=None, aws_access_key=None, aws_region="")
    with patch("bedgate.providers.transport.boto3.client") as client_factory:
        build_bedrock_client(settings)

    client_factory.assert_called_once_with("bedrock-runtime", region_name="us-east-1")


def test_get_bedrock_adapter_wires_boto3_transport() -> None:
    from bedgate.core.deps import get_bedrock_adapter
    from bedgate.providers.bedrock_runtime import BedrockRuntimeAdapter

    settings = Settings(
        _env_file=None, api_model_id="amazon.nova-pro-v1:0", aws_region="us-east-2", aws_access_key=None
    )
    with patch("bedgate.providers.transport.boto3.client") as client_factory:
        adapter = get_bedrock_adapter(settings)

    assert isinstance(adapter, BedrockRuntimeAdapter)
    assert adapter.get_model().id == "amazon.nova-pro-v1:0"
    client_factory.assert_called_once_with("bedrock-runtime", region_name="us-east-2")
