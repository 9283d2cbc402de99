from __future__ import annotations


class BedgateError(RuntimeError):
    """Base class for errors surfaced by bedgate adapters."""

    default_detail = "Bedrock runtime error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NoResponseStream(BedgateError):
    default_detail = "No response stream available"


class NoContentGenerated(BedgateError):
    default_detail = "No content was generated by the model"


class TransportFailure(BedgateError):
    default_detail = "Bedrock runtime stream failed"


def transport_failure(exc: BaseException) -> TransportFailure:
    detail = str(exc) or type(exc).__name__
    return TransportFailure(detail)
