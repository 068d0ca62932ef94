import threading
from contextlib import AbstractContextManager, contextmanager
from typing import Iterator, Protocol

from app.domain.enums import LockMode
from app.infra.paths import shard_of


class StoreLock(Protocol):
    def hold(self, file_hash: str) -> AbstractContextManager[None]: ...


class GlobalStoreLock:
    """One lock for the whole store: at most one write or delete at a time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, file_hash: str) -> Iterator[None]:
        with self._lock:
            yield


class ShardedStoreLock:
    """One lock per shard prefix; unrelated shards proceed in parallel."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, shard: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(shard)
            if lock is None:
                lock = self._locks[shard] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, file_hash: str) -> Iterator[None]:
        with self._lock_for(shard_of(file_hash)):
            yield


def build_lock(mode: LockMode) -> GlobalStoreLock | ShardedStoreLock:
    if mode is LockMode.shard:
        return ShardedStoreLock()
    return GlobalStoreLock()
