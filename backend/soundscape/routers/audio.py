from __future__ import annotations

import logging
import math
from typing import List, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import Response, StreamingResponse

from ..config import settings
from ..core.errors import InvalidParameterError
from ..core.freesound import UPSTREAM_ERRORS
from ..schemas import AudioEnvironmentSchema, FreesoundSearchResponse, StreamOptions
from ..services.audio import EnvironmentNotFoundError, audio_service

router = APIRouter()
LOGGER = logging.getLogger(__name__)


@router.get("/environments", response_model=List[AudioEnvironmentSchema])
async def list_environments() -> List[AudioEnvironmentSchema]:
    return [AudioEnvironmentSchema.model_validate(env) for env in audio_service.list_environments()]


@router.get("/generate/{environment_id}")
async def generate_audio(
    environment_id: str,
    duration: Optional[float] = Query(default=None, ge=0, description="Length in seconds, fractions are dropped"),
    volume: Optional[float] = Query(default=None, ge=0.0, le=1.0),
) -> Response:
    seconds = settings.default_duration_seconds if duration is None else math.floor(duration)
    duration_ms = seconds * 1000
    level = settings.default_volume if volume is None else volume
    try:
        audio = await audio_service.generate_environment_audio(environment_id, duration_ms, level)
    except EnvironmentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return Response(
        content=audio.data,
        media_type=audio.media_type,
        headers={"Cache-Control": "public, max-age=3600", "X-Audio-Source": audio.source},
    )


@router.post("/stream/{environment_id}")
async def stream_audio(
    environment_id: str,
    options: Optional[StreamOptions] = Body(default=None),
) -> StreamingResponse:
    try:
        audio_service.get_environment(environment_id)
    except EnvironmentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    opts = options or StreamOptions()
    max_ms = settings.max_duration_seconds * 1000
    if opts.duration is not None and opts.duration > max_ms:
        raise HTTPException(status_code=400, detail=f"duration {opts.duration}ms exceeds the {max_ms}ms limit")

    LOGGER.info(f"[audio] 🔵 stream requested env={environment_id} duration={opts.duration} volume={opts.volume}")
    return StreamingResponse(
        audio_service.stream_environment_audio(environment_id, opts.duration, opts.volume),
        media_type="audio/wav",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/search", response_model=FreesoundSearchResponse)
async def search_freesound(query: str = Query(..., min_length=1)) -> dict:
    try:
        return await audio_service.search_samples(query)
    except UPSTREAM_ERRORS as exc:
        LOGGER.warning(f"[audio] ❌ search failed for '{query}': {exc}")
        raise HTTPException(status_code=502, detail="Failed to search Freesound samples") from exc
