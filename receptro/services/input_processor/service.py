from fastapi import HTTPException

from receptro.config import Config
from receptro.encoding import InvalidBase64Error, decode_base64
from receptro.logging_utils import StructuredLogger
from receptro.metrics import upload_size_bytes
from receptro.models.schemas import FileData, UploadedFile

logger = StructuredLogger("input_processor")


def decode_upload(file: FileData, request_id: str) -> UploadedFile:
    """Decode a base64 file submission into an UploadedFile."""
    logger.info(
        "Decoding upload",
        context={
            "file_name": file.name,
            "mime_type": file.type,
            "encoded_length": len(file.data),
        },
        request_id=request_id,
    )

    try:
        content = decode_base64(file.data)
    except InvalidBase64Error as e:
        logger.warning(
            "Upload is not valid base64",
            context={"file_name": file.name, "error": str(e)},
            request_id=request_id,
        )
        raise HTTPException(status_code=400, detail="Invalid base64 file data")

    return build_upload(file.name, file.type, content, request_id)


def build_upload(
    name: str, mime_type: str, content: bytes, request_id: str
) -> UploadedFile:
    """Validate raw upload bytes and wrap them for the orchestrator."""
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if len(content) > Config.UPLOAD.MAX_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Uploaded file exceeds maximum size of {Config.UPLOAD.MAX_BYTES} bytes",
        )

    upload_size_bytes.observe(len(content))

    logger.info(
        "Upload accepted",
        context={"file_name": name, "mime_type": mime_type, "size": len(content)},
        request_id=request_id,
    )

    return UploadedFile(name=name, mime_type=mime_type.strip().lower(), content=content)
