from __future__ import annotations


class BlobStoreError(Exception):
    """Base for every failure the store reports to its caller.

    `message` is the short, user-facing text rendered by the HTTP layer;
    `status_code` is the status it maps to.
    """

    status_code = 500
    message = "Internal storage error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ReadError(BlobStoreError):
    message = "Failed to read file"


class DigestMismatch(BlobStoreError):
    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm} hash mismatch")
        self.algorithm = algorithm


class UnsupportedAlgorithm(BlobStoreError):
    status_code = 400

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported hash algorithm: {name}")
        self.name = name


class InvalidIdentifier(BlobStoreError):
    status_code = 400
    message = "Invalid file hash"


class NotFound(BlobStoreError):
    status_code = 404
    message = "File not found"


class IntegrityFailure(BlobStoreError):
    message = "File integrity check failed"


class StoreWriteError(BlobStoreError):
    message = "Failed to store file"


class StoreDeleteError(BlobStoreError):
    message = "Failed to delete file"
