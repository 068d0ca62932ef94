import re
from pathlib import Path

from app.domain.errors import InvalidIdentifier

SHARD_PREFIX_LEN = 2

_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")


def validate_identifier(file_hash: str) -> str:
    """Normalise a client-supplied primary digest or raise InvalidIdentifier.

    Only a full-length lowercase sha256 hex string is accepted, so a lookup
    key can never resolve to the store root or outside it.
    """

    normalized = file_hash.strip().lower()
    if not _SHA256_HEX.match(normalized):
        raise InvalidIdentifier()
    return normalized


def shard_of(file_hash: str) -> str:
    return file_hash[:SHARD_PREFIX_LEN]


def resolve_path(root: Path, file_hash: str) -> Path:
    if len(file_hash) < SHARD_PREFIX_LEN:
        raise InvalidIdentifier()
    return root / shard_of(file_hash) / file_hash
