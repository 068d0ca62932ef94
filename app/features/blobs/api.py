from typing import Any

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import StreamingResponse

from app.features.blobs.schemas import ErrorResponse, HashResponse, MessageResponse
from app.features.blobs.service import BlobService, iter_chunks

router = APIRouter(tags=["blobs"])

NO_FILE_PART = "No file part in the request"

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _service(request: Request) -> BlobService:
    return BlobService(store=request.app.state.store)


@router.post("/upload", status_code=201, response_model=HashResponse, responses=_ERRORS)
def upload_file(
    request: Request,
    file: UploadFile = File(...),
    md5: str | None = Form(None),
    sha1: str | None = Form(None),
    sha256: str | None = Form(None),
) -> dict[str, str]:
    # A missing or non-file `file` part is answered by the validation handler in app.main.
    return _service(request).upload(file=file, claims={"md5": md5, "sha1": sha1, "sha256": sha256})


@router.get("/download/{file_hash}", response_class=StreamingResponse, responses=_ERRORS)
def download_file(request: Request, file_hash: str) -> StreamingResponse:
    handle, size = _service(request).download(file_hash=file_hash)
    return StreamingResponse(
        iter_chunks(handle),
        media_type="application/octet-stream",
        headers={
            "Content-Length": str(size),
            "Content-Disposition": f'attachment; filename="{file_hash.strip().lower()}"',
        },
    )


@router.delete("/delete/{file_hash}", response_model=MessageResponse, responses=_ERRORS)
def delete_file(request: Request, file_hash: str) -> dict[str, str]:
    return _service(request).delete(file_hash=file_hash)
