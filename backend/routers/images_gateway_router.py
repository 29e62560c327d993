# backend/routers/images_gateway_router.py
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from routers.dependencies import get_session_user
from schemas.auth import SessionUser
from schemas.products import ImageUploadResponse
from services.access_control import require_admin
from services.cloudinary_service import get_image_storage, validate_image_file
from services.errors import StorageUnavailable

router = APIRouter(prefix="/images", tags=["images-gateway"])


@router.post("/upload", response_model=ImageUploadResponse)
async def upload_image(
    image: UploadFile = File(..., description="image file"),
    user: Optional[SessionUser] = Depends(get_session_user),
    storage=Depends(get_image_storage),
):
    require_admin(user)
    if storage is None:
        raise StorageUnavailable()

    content = await image.read()
    validate_image_file(content, image.filename)
    result = await storage.upload_product_image(file_content=content, filename=image.filename)
    return ImageUploadResponse(image_url=result["url"])
