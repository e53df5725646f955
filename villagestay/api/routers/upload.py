import shutil
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from villagestay.api.dependencies import require_admin
from villagestay.core.config import get_settings

router = APIRouter()

ALLOWED_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif"}


@router.post("/image")
async def upload_image(
    image: UploadFile = File(...),
    user=Depends(require_admin),
):
    """
    Store a photo for homestays/content; returns the public URL.
    """
    suffix = Path(image.filename or "").suffix.lower()
    if suffix not in ALLOWED_SUFFIXES:
        raise HTTPException(status_code=400, detail="Unsupported image type")

    upload_dir = Path(get_settings().STATIC_UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{user.id}_{uuid4().hex}{suffix}"
    dest = upload_dir / filename
    with dest.open("wb") as f:
        shutil.copyfileobj(image.file, f)
    return {"url": f"/static/uploads/{filename}"}
