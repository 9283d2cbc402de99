from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from bedgate.core.config import Settings
from bedgate.domain.chat import Message, OutputEvent
from bedgate.domain.models import ModelConfig


class ProviderAdapter(ABC):
    name: str

    @classmethod
    @abstractmethod
    def should_use(cls, settings: Settings) -> bool:
        """Selection predicate for the outer dispatcher; must not need an instance."""
        raise NotImplementedError

    @abstractmethod
    def get_model(self) -> ModelConfig:
        raise NotImplementedError

    @abstractmethod
    def create_message(self, system_prompt: str, messages: Sequence[Message]) -> AsyncIterator[OutputEvent]:
        """Stream output events for one conversation turn. Finite and not restartable."""
        raise NotImplementedError
