"""BYTESONG API — upload a file, get its song back as WAV."""

from __future__ import annotations

import asyncio
import io
import traceback
from pathlib import Path
from typing import Annotated
from urllib.parse import quote

import structlog
from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from bytesong.config import settings
from bytesong.pipeline import render_song

logger = structlog.get_logger()

router = APIRouter(tags=["upload"])


def content_disposition(stem: str) -> str:
    """Attachment header for `<stem>.wav` that survives non-latin-1 names.

    Header values go out as latin-1, so the plain `filename` is an ASCII
    fallback and the real name travels in `filename*` (RFC 5987).
    """
    fallback = stem.encode("ascii", "ignore").decode("ascii")
    fallback = "".join(c for c in fallback if c.isprintable() and c not in '"\\') or "song"
    return f"attachment; filename=\"{fallback}.wav\"; filename*=UTF-8''{quote(stem + '.wav')}"


@router.post("/upload")
async def upload_file(
    file: Annotated[UploadFile, File(...)],
) -> Response:
    """Hash any uploaded file into a plucked-string song.

    Returns the rendered WAV as an attachment named after the upload.
    Empty files are valid input and hash to a song like any other.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    content = await file.read()
    size_mb = round(len(content) / 1024 / 1024, 2)
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"Upload too large: {size_mb}MB. Limit is {settings.max_upload_mb}MB.",
        )

    logger.info("upload.received", filename=file.filename, size_mb=size_mb)

    try:
        song, wav = await asyncio.to_thread(render_song, io.BytesIO(content))
    except Exception as e:
        logger.error("upload.failed", error=str(e), traceback=traceback.format_exc())
        raise HTTPException(status_code=500, detail=f"Rendering failed: {e!s}") from e

    stem = Path(file.filename).stem or "song"
    logger.info("upload.rendered", filename=file.filename, digest=song.digest[:16], wav_kb=round(len(wav) / 1024, 1))

    return Response(
        content=wav,
        media_type="audio/wav",
        headers={
            "Content-Disposition": content_disposition(stem),
            "X-Song-Digest": song.digest,
            "X-Song-Tempo": str(song.tempo_bpm),
            "X-Song-Key": song.to_dict()["key"],
        },
    )
