import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from app.domain.enums import LockMode


@dataclass(frozen=True)
class AppConfig:
    store_dir: Path
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 1337
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=("*",))
    lock_mode: LockMode = LockMode.global_


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env

    port_raw = env.get("BLOBSTORE_PORT", "1337")
    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"BLOBSTORE_PORT must be an integer, got {port_raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"BLOBSTORE_PORT out of range: {port}")

    mode_raw = env.get("BLOBSTORE_LOCK_MODE", LockMode.global_.value).strip().lower()
    try:
        lock_mode = LockMode(mode_raw)
    except ValueError:
        raise ValueError(f"BLOBSTORE_LOCK_MODE must be 'global' or 'shard', got {mode_raw!r}") from None

    return AppConfig(
        store_dir=Path(env.get("BLOBSTORE_STORE_DIR", "store")),
        host=env.get("BLOBSTORE_HOST", "0.0.0.0"),  # noqa: S104
        port=port,
        log_level=env.get("BLOBSTORE_LOG_LEVEL", "INFO").upper(),
        cors_origins=_parse_origins(env.get("BLOBSTORE_CORS_ORIGINS", "*")),
        lock_mode=lock_mode,
    )
