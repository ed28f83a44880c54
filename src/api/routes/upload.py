from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.error import to_http_error
from src.app.services.image_storage import IImageStorage
from src.app.use_cases.upload import MAX_FILE_SIZE, UploadImageResponse, UploadImageUseCase
from src.depends import get_current_user, get_image_storage
from src.domain.actor import Actor

router = APIRouter(prefix="/upload", tags=["Upload"])


@router.post("/image", response_model=UploadImageResponse)
async def upload_image(
    file: UploadFile = File(...),
    folder: Optional[str] = Form(None),
    actor: Actor = Depends(get_current_user),
    storage: IImageStorage = Depends(get_image_storage),
):
    """
    Upload a job photo (multipart)

    Raises:
        - 422 Unprocessable Entity: Empty, too large or not an image
        - 502 Bad Gateway: Image storage unavailable
    """
    # One byte past the cap is enough to reject an oversized file
    content = await file.read(MAX_FILE_SIZE + 1)
    result = await UploadImageUseCase(storage).execute(
        actor, content, file.filename or "image", file.content_type, folder
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
