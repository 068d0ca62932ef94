import logging
import os
from collections.abc import Iterator
from typing import BinaryIO

from fastapi import UploadFile

from app.infra.hashing import CHUNK_SIZE
from app.infra.storage import BlobStore

logger = logging.getLogger(__name__)


def iter_chunks(handle: BinaryIO) -> Iterator[bytes]:
    try:
        for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
            yield chunk
    finally:
        handle.close()


class BlobService:
    def __init__(self, *, store: BlobStore) -> None:
        self._store = store

    def upload(self, *, file: UploadFile, claims: dict[str, str | None]) -> dict[str, str]:
        file_hash = self._store.put(file.file, claims)
        logger.info("Uploaded %s (%s)", file_hash, file.filename or "unnamed")
        return {"hash": file_hash}

    def download(self, *, file_hash: str) -> tuple[BinaryIO, int]:
        handle = self._store.open(file_hash)
        return handle, os.fstat(handle.fileno()).st_size

    def delete(self, *, file_hash: str) -> dict[str, str]:
        self._store.delete(file_hash)
        logger.info("Deleted %s", file_hash)
        return {"message": "File deleted"}
