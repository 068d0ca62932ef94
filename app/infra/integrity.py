import logging
from collections.abc import Mapping
from pathlib import Path
from typing import BinaryIO

from app.domain.enums import PRIMARY_ALGORITHM, HashAlgorithm
from app.domain.errors import DigestMismatch, IntegrityFailure, NotFound, ReadError, UnsupportedAlgorithm
from app.infra.hashing import compute_digests, hash_file

logger = logging.getLogger(__name__)


def normalize_claims(claims: Mapping[str, str | None]) -> dict[HashAlgorithm, str]:
    """Turn raw client claims into a ClaimSet.

    Empty values count as "not asserted". Unknown algorithm names are
    rejected even when their value is empty.
    """

    out: dict[HashAlgorithm, str] = {}
    for name, value in claims.items():
        try:
            alg = HashAlgorithm(name.strip().lower())
        except ValueError:
            raise UnsupportedAlgorithm(name) from None
        v = (value or "").strip().lower()
        if v:
            out[alg] = v
    return out


def verify_claims(computed: Mapping[HashAlgorithm, str], claims: Mapping[HashAlgorithm, str]) -> None:
    # Check in the engine's algorithm order so the reported mismatch is stable.
    for alg, actual in computed.items():
        expected = claims.get(alg)
        if expected and expected != actual:
            raise DigestMismatch(alg.value)
    for alg in claims:
        if alg not in computed:
            raise UnsupportedAlgorithm(alg.value)


def verify_stored(path: Path, expected_hex: str) -> None:
    try:
        actual = hash_file(path, PRIMARY_ALGORITHM)
    except FileNotFoundError:
        raise NotFound() from None
    except OSError as e:
        logger.error("Failed to read stored file %s: %s", path, e)
        raise ReadError() from e
    if actual != expected_hex:
        raise IntegrityFailure()


def verify_handle(handle: BinaryIO, expected_hex: str) -> None:
    """Re-hash an already open stored object and rewind it for serving."""

    actual = compute_digests(handle, (PRIMARY_ALGORITHM,))[PRIMARY_ALGORITHM]
    if actual != expected_hex:
        raise IntegrityFailure()
    handle.seek(0)
