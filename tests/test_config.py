from pathlib import Path

import pytest

from app.config import load_config
from app.domain.enums import LockMode


def test_load_config_defaults() -> None:
    cfg = load_config({})

    assert cfg.store_dir == Path("store")
    assert cfg.port == 1337
    assert cfg.cors_origins == ("*",)
    assert cfg.lock_mode is LockMode.global_


def test_load_config_overrides() -> None:
    cfg = load_config(
        {
            "BLOBSTORE_STORE_DIR": "/srv/blobs",
            "BLOBSTORE_PORT": "8080",
            "BLOBSTORE_LOG_LEVEL": "debug",
            "BLOBSTORE_CORS_ORIGINS": "http://a.test, http://b.test",
            "BLOBSTORE_LOCK_MODE": "shard",
        }
    )

    assert cfg.store_dir == Path("/srv/blobs")
    assert cfg.port == 8080
    assert cfg.log_level == "DEBUG"
    assert cfg.cors_origins == ("http://a.test", "http://b.test")
    assert cfg.lock_mode is LockMode.shard


@pytest.mark.parametrize(
    "env",
    [{"BLOBSTORE_PORT": "abc"}, {"BLOBSTORE_PORT": "0"}, {"BLOBSTORE_LOCK_MODE": "per-object"}],
)
def test_load_config_rejects_invalid_values(env: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        load_config(env)
