from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from upload_gateway.api.deps import get_storage
from upload_gateway.core.config import get_bucket_name
from upload_gateway.schemas import ResponseMessage
from upload_gateway.services.storage import StorageService
from upload_gateway.services.uploads import extract_first_file, upload_file

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=ResponseMessage, status_code=status.HTTP_201_CREATED)
async def upload(
    request: Request,
    storage: StorageService = Depends(get_storage),
) -> ResponseMessage:
    """Store the first file of a multipart body under its own filename.

    Starlette parses the whole body before the first field is inspected, so
    later parts are received and spooled but never uploaded.
    """
    bucket = get_bucket_name()

    try:
        async with request.form() as form:
            file = await extract_first_file(form)
    except (MultiPartException, StarletteHTTPException) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed multipart body"
        ) from exc

    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file found")

    await upload_file(storage, file.filename, file.content_type, file.data, bucket)
    return ResponseMessage(status=status.HTTP_201_CREATED, message="File uploaded successfully")
