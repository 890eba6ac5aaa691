"""Solve routes: upload a maze image and walk it."""

import io
import logging
import re
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from mazewalker.api.deps import SettingsDep, read_upload
from mazewalker.config import Settings
from mazewalker.schemas.solution import SolutionRecord
from mazewalker.services import renderer
from mazewalker.services.image_loader import load_image_bytes, open_image_bytes
from mazewalker.services.solution_service import (
    save_solution,
    solution_path_for,
    solve_image,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/solve", tags=["Solve"])

NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def _resolve_name(name: Optional[str], file: UploadFile, strict: bool) -> str:
    """
    Pick the record name: explicit name, else the upload's file stem.

    An explicit name, or any name used as a file name (strict), must already
    be safe. Otherwise the file stem is reduced to safe characters.
    """
    if name is None:
        stem = Path(file.filename or "").stem
        if not strict:
            return UNSAFE_NAME_CHARS.sub("_", stem)[:64] or "maze"
        name = stem or "maze"

    if not NAME_PATTERN.match(name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid solution name '{name}'. Use letters, digits, '_' or '-'",
        )
    return name


def _solve_bytes(data: bytes, name: str) -> SolutionRecord:
    return solve_image(load_image_bytes(data), name=name)


def _animate_bytes(data: bytes, name: str, settings: Settings) -> io.BytesIO:
    record = _solve_bytes(data, name)

    buffer = io.BytesIO()
    renderer.save_animation(
        open_image_bytes(data),
        record.path(),
        buffer,
        frame_ms=settings.animation_frame_ms,
        max_frames=settings.animation_max_frames,
    )
    buffer.seek(0)
    return buffer


@router.post(
    "",
    response_model=SolutionRecord,
)
async def solve_upload(
    settings: SettingsDep,
    file: UploadFile = File(..., description="322x322 maze image"),
    name: Optional[str] = Query(None, description="Name for the solution record"),
    save: bool = Query(False, description="Store the record in the solutions directory"),
) -> SolutionRecord:
    """Decode an uploaded maze image and walk it with the right-hand rule.

    Returns the decoded grid, start, end and walked path. A walk that hits
    the iteration cap is still returned, with status cap_exceeded.
    """
    record_name = _resolve_name(name, file, strict=name is not None or save)
    data = await read_upload(file, settings)

    record = await run_in_threadpool(_solve_bytes, data, record_name)

    if save:
        save_solution(record, solution_path_for(settings.solutions_dir, record_name))

    logger.info(
        f"Solved upload {record_name}: {record.status.value}, "
        f"{len(record.solution)} steps"
    )
    return record


@router.post("/animation")
async def solve_animation(
    settings: SettingsDep,
    file: UploadFile = File(..., description="322x322 maze image"),
) -> StreamingResponse:
    """Solve an uploaded maze and return the replay as an animated GIF.

    Replays longer than the configured frame limit are subsampled.
    """
    record_name = _resolve_name(None, file, strict=False)
    data = await read_upload(file, settings)

    buffer = await run_in_threadpool(_animate_bytes, data, record_name, settings)

    return StreamingResponse(
        buffer,
        media_type="image/gif",
        headers={"Content-Disposition": f"inline; filename={record_name}.gif"},
    )
