# routes/uploads.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from greatwok.core import config
from greatwok.core.security import require_admin
from greatwok.core.storage_service import get_uploader
from greatwok.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/upload")
def upload_image(file: Optional[UploadFile] = File(None),
                 admin: User = Depends(require_admin),
                 uploader=Depends(get_uploader)):
    """Buffer the image in memory and push it to object storage."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    data = file.file.read(config.MAX_UPLOAD_BYTES + 1)
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(data) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        url = uploader.upload(file.filename, data, file.content_type)
    except Exception:
        logger.exception("Image upload failed for %s", file.filename)
        raise HTTPException(status_code=500, detail="Failed to upload image")
    return {"imageUrl": url}
