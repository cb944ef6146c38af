import logging
from dataclasses import dataclass

from starlette.datastructures import FormData, UploadFile

from upload_gateway.core.errors import MalformedFieldError
from upload_gateway.services.storage import StorageService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileUpload:
    filename: str
    content_type: str
    data: bytes


async def extract_first_file(form: FormData) -> FileUpload | None:
    """Buffer the first multipart field of ``form`` into memory.

    Returns None for a body without fields. Fields after the first one are
    never uploaded.
    """
    for _, value in form.multi_items():
        if not isinstance(value, UploadFile) or not value.filename:
            raise MalformedFieldError("field has no filename")
        if not value.content_type:
            raise MalformedFieldError(f"field {value.filename!r} has no content type")
        data = await value.read()
        return FileUpload(filename=value.filename, content_type=value.content_type, data=data)
    return None


async def upload_file(
    storage: StorageService,
    object_key: str,
    content_type: str,
    payload: bytes,
    bucket: str,
) -> None:
    # Key is used verbatim, an existing object under the same key is replaced.
    logger.info("Uploading %s (%s)", object_key, content_type)
    await storage.put_object(bucket, object_key, payload, content_type)
