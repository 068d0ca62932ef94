import hashlib
import io
from pathlib import Path

import pytest

from app.domain.enums import HashAlgorithm
from app.domain.errors import DigestMismatch, IntegrityFailure, NotFound, ReadError, UnsupportedAlgorithm
from app.infra.hashing import compute_digests
from app.infra.integrity import normalize_claims, verify_claims, verify_handle, verify_stored


def test_normalize_claims_drops_empty_values() -> None:
    claims = normalize_claims({"md5": "", "sha1": None, "sha256": " ABC "})
    assert claims == {HashAlgorithm.sha256: "abc"}


def test_normalize_claims_rejects_unknown_algorithm() -> None:
    with pytest.raises(UnsupportedAlgorithm):
        normalize_claims({"crc32": "deadbeef"})


def test_verify_claims_accepts_matching_and_absent_claims() -> None:
    computed = compute_digests(io.BytesIO(b"hello"))
    claims = normalize_claims({"sha256": hashlib.sha256(b"hello").hexdigest()})

    verify_claims(computed, claims)
    verify_claims(computed, {})


def test_verify_claims_reports_the_mismatching_algorithm() -> None:
    computed = compute_digests(io.BytesIO(b"hello"))
    claims = normalize_claims({"sha256": hashlib.sha256(b"hello").hexdigest(), "md5": "0" * 32})

    with pytest.raises(DigestMismatch) as exc:
        verify_claims(computed, claims)

    assert exc.value.algorithm == "md5"
    assert exc.value.message == "md5 hash mismatch"


def test_verify_claims_is_case_insensitive() -> None:
    computed = compute_digests(io.BytesIO(b"hello"))
    claims = normalize_claims({"sha1": hashlib.sha1(b"hello").hexdigest().upper()})

    verify_claims(computed, claims)


def test_verify_stored(tmp_path: Path) -> None:
    path = tmp_path / "blob"
    path.write_bytes(b"content")
    digest = hashlib.sha256(b"content").hexdigest()

    verify_stored(path, digest)

    path.write_bytes(b"tampered")
    with pytest.raises(IntegrityFailure):
        verify_stored(path, digest)


def test_verify_stored_missing_file_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        verify_stored(tmp_path / "missing", "0" * 64)


def test_verify_stored_unreadable_path_is_read_error(tmp_path: Path) -> None:
    # Opening a directory fails with an OSError other than "not found".
    unreadable = tmp_path / "shard" / ("a" * 64)
    unreadable.mkdir(parents=True)

    with pytest.raises(ReadError) as exc:
        verify_stored(unreadable, "a" * 64)

    assert exc.value.message == "Failed to read file"
    assert str(tmp_path) not in str(exc.value)


def test_verify_handle_rewinds_after_success() -> None:
    handle = io.BytesIO(b"served")

    verify_handle(handle, hashlib.sha256(b"served").hexdigest())

    assert handle.read() == b"served"


def test_verify_handle_mismatch() -> None:
    with pytest.raises(IntegrityFailure):
        verify_handle(io.BytesIO(b"rotted"), hashlib.sha256(b"served").hexdigest())
