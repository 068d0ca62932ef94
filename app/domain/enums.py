from enum import Enum


class HashAlgorithm(str, Enum):
    md5 = "md5"
    sha1 = "sha1"
    sha256 = "sha256"


# Fixed fan-out order for the digest engine; the last one keys the store.
ALGORITHMS: tuple[HashAlgorithm, ...] = (HashAlgorithm.md5, HashAlgorithm.sha1, HashAlgorithm.sha256)
PRIMARY_ALGORITHM = HashAlgorithm.sha256


class LockMode(str, Enum):
    global_ = "global"
    shard = "shard"
