from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

# Attributes present on every LogRecord; anything else came in via `extra=`.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


@dataclass(frozen=True)
class LogContext:
    request_id: str | None = None
    provider: str | None = None
    model: str | None = None


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key == "ctx":
                continue
            base[key] = value
        ctx = getattr(record, "ctx", None)
        if isinstance(ctx, dict):
            base.update({k: v for k, v in ctx.items() if v is not None})
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def configure_logging(*, level: str) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)


class _ContextAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["ctx"] = self.extra["ctx"]
        kwargs["extra"] = extra
        return msg, kwargs


def with_context(logger: logging.Logger, ctx: LogContext) -> logging.LoggerAdapter:
    return _ContextAdapter(logger, extra={"ctx": asdict(ctx)})
