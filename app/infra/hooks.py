import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteEvent:
    file_hash: str
    path: Path


class WriteHooks(Protocol):
    def pre_write(self, event: WriteEvent) -> None: ...

    def post_write(self, event: WriteEvent) -> None: ...


class LoggingWriteHooks:
    def pre_write(self, event: WriteEvent) -> None:
        logger.info("Pre-processing file %s", event.file_hash)

    def post_write(self, event: WriteEvent) -> None:
        logger.info("Post-processing file %s", event.file_hash)


def fire(hooks: WriteHooks | None, stage: str, event: WriteEvent) -> None:
    """Invoke one hook stage. Hook failures are logged and never propagate."""

    if hooks is None:
        return
    try:
        getattr(hooks, stage)(event)
    except Exception:
        logger.exception("%s hook failed for %s", stage, event.file_hash)
