"""Logging setup and a per-target logger that stamps every line with target and step."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(target)s] [%(step)s] %(message)s"


class _ContextDefaults(logging.Filter):
    """Fills ``target``/``step`` for records logged without a TargetLogger."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "target"):
            record.target = "-"
        if not hasattr(record, "step"):
            record.step = "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if getattr(handler, "_rera_handler", False):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ContextDefaults())
    handler._rera_handler = True
    root.addHandler(handler)


class TargetLogger(logging.LoggerAdapter):
    """Logger adapter bound to one target and (optionally) one step."""

    def __init__(self, logger: logging.Logger, target: str, step: Optional[str] = None):
        super().__init__(logger, {"target": target, "step": step or "-"})

    @property
    def target(self) -> str:
        return self.extra["target"]

    def for_step(self, step: str) -> "TargetLogger":
        return TargetLogger(self.logger, self.extra["target"], step)

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def get_target_logger(target: str, name: str = "rera_agent") -> TargetLogger:
    return TargetLogger(logging.getLogger(name), target)
