import logging
import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import BinaryIO

from app.domain.enums import ALGORITHMS, PRIMARY_ALGORITHM
from app.domain.errors import NotFound, ReadError, StoreDeleteError, StoreWriteError
from app.infra.hashing import compute_digests
from app.infra.hooks import WriteEvent, WriteHooks, fire
from app.infra.integrity import normalize_claims, verify_claims, verify_handle, verify_stored
from app.infra.locks import GlobalStoreLock, StoreLock
from app.infra.paths import resolve_path, validate_identifier

logger = logging.getLogger(__name__)


class BlobStore:
    """Content-addressed store rooted at a directory.

    Objects live at ``<root>/<hash[:2]>/<hash>``; the filesystem is the only
    catalog. Writes and deletes go through `lock`, hashing and read-time
    verification do not.
    """

    def __init__(
        self,
        root: Path,
        *,
        lock: StoreLock | None = None,
        hooks: WriteHooks | None = None,
    ) -> None:
        self._root = root
        self._lock = lock if lock is not None else GlobalStoreLock()
        self._hooks = hooks

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    def path_for(self, file_hash: str) -> Path:
        return resolve_path(self._root, validate_identifier(file_hash))

    def exists(self, file_hash: str) -> bool:
        path = self.path_for(file_hash)
        try:
            return path.is_file()
        except OSError:
            return False

    def put(self, stream: BinaryIO, claims: Mapping[str, str | None] | None = None) -> str:
        claim_set = normalize_claims(claims or {})
        computed = compute_digests(stream, ALGORITHMS)
        verify_claims(computed, claim_set)

        file_hash = computed[PRIMARY_ALGORITHM]
        path = resolve_path(self._root, file_hash)
        event = WriteEvent(file_hash=file_hash, path=path)

        fire(self._hooks, "pre_write", event)
        with self._lock.hold(file_hash):
            self._write(stream, path)
            fire(self._hooks, "post_write", event)

        logger.debug("Stored %s at %s", file_hash, path)
        return file_hash

    def _write(self, stream: BinaryIO, path: Path) -> None:
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            stream.seek(0)
            with tempfile.NamedTemporaryFile(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                shutil.copyfileobj(stream, tmp)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, ValueError) as e:
            logger.error("Failed to write %s: %s", path, e)
            raise StoreWriteError() from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    def get(self, file_hash: str) -> Path:
        file_hash = validate_identifier(file_hash)
        path = resolve_path(self._root, file_hash)
        if not path.is_file():
            raise NotFound()
        verify_stored(path, file_hash)
        return path

    def open(self, file_hash: str) -> BinaryIO:
        """Open a verified object for streaming.

        The digest is checked on the same handle that is returned, so a
        concurrent delete or replace cannot change what the caller reads.
        """

        file_hash = validate_identifier(file_hash)
        path = resolve_path(self._root, file_hash)
        if not path.is_file():
            raise NotFound()
        try:
            handle = path.open("rb")
        except FileNotFoundError:
            raise NotFound() from None
        except OSError as e:
            logger.error("Failed to open %s: %s", path, e)
            raise ReadError() from e
        try:
            verify_handle(handle, file_hash)
        except BaseException:
            handle.close()
            raise
        return handle

    def delete(self, file_hash: str) -> None:
        file_hash = validate_identifier(file_hash)
        path = resolve_path(self._root, file_hash)
        if not path.is_file():
            raise NotFound()
        with self._lock.hold(file_hash):
            try:
                path.unlink()
            except FileNotFoundError:
                raise NotFound() from None
            except OSError as e:
                logger.error("Failed to delete %s: %s", path, e)
                raise StoreDeleteError() from e
        logger.debug("Deleted %s", file_hash)
