"""Model id resolution and cross-region routing for the Bedrock runtime."""

from __future__ import annotations

import logging
from typing import Mapping

from bedgate.domain.models import BEDROCK_DEFAULT_MODEL_ID, BEDROCK_MODELS, ModelConfig, ModelInfo

log = logging.getLogger(__name__)

NOVA_FAMILY_MARKER = "nova"

# First three characters of the region hint -> inference profile prefix.
_REGION_PREFIXES = {
    "us-": "us.",
    "eu-": "eu.",
}


def resolve_model(
    requested_id: str | None,
    *,
    catalog: Mapping[str, ModelInfo] = BEDROCK_MODELS,
    default_id: str = BEDROCK_DEFAULT_MODEL_ID,
) -> ModelConfig:
    if requested_id and requested_id in catalog:
        return ModelConfig(id=requested_id, info=catalog[requested_id])
    if requested_id:
        log.warning("bedrock.model.unknown", extra={"requested_model": requested_id, "model": default_id})
    return ModelConfig(id=default_id, info=catalog[default_id])


def apply_routing_prefix(model_id: str, region_hint: str | None, enabled: bool) -> str:
    if not enabled:
        return model_id
    prefix = _REGION_PREFIXES.get((region_hint or "")[:3])
    if prefix is None:
        return model_id
    return f"{prefix}{model_id}"


def is_nova_family(model_id: str) -> bool:
    return NOVA_FAMILY_MARKER in model_id.lower()


def should_use_this_adapter(
    requested_id: str | None,
    explicit_flag: bool = False,
    *,
    default_id: str = BEDROCK_DEFAULT_MODEL_ID,
) -> bool:
    """True for Nova-family models or when the runtime adapter is explicitly requested."""
    model_id = (requested_id or default_id).lower()
    return NOVA_FAMILY_MARKER in model_id or explicit_flag is True
