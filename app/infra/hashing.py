import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Iterable

from app.domain.enums import ALGORITHMS, HashAlgorithm
from app.domain.errors import ReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def compute_digests(
    stream: BinaryIO, algorithms: Iterable[HashAlgorithm] = ALGORITHMS
) -> dict[HashAlgorithm, str]:
    """Hash a stream with every algorithm in a single forward pass.

    Each chunk is fed to all hashers before the next read, so the source is
    consumed exactly once. The result preserves the order of `algorithms`
    and holds lowercase hex digests.
    """

    hashers = {alg: hashlib.new(alg.value) for alg in algorithms}
    try:
        for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise ReadError("Upload stream is not binary")
            for hasher in hashers.values():
                hasher.update(chunk)
    except OSError as e:
        logger.error("Failed to read stream: %s", e)
        raise ReadError() from e
    return {alg: hasher.hexdigest() for alg, hasher in hashers.items()}


def hash_file(path: Path, algorithm: HashAlgorithm) -> str:
    # Open errors (missing file included) propagate to the caller untouched.
    with path.open("rb") as f:
        return compute_digests(f, (algorithm,))[algorithm]
