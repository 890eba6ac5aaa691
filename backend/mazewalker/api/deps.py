"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, UploadFile, status

from mazewalker.config import Settings, get_settings


async def read_upload(file: UploadFile, settings: Settings) -> bytes:
    """Read an uploaded image, rejecting files over the size limit."""
    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload exceeds {settings.max_upload_bytes} bytes",
        )
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )
    return data


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
