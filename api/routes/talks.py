"""Talk data and schedule API endpoints"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse, ScheduleEntryResponse
from app.config import Settings
from app.dependencies import get_config, get_schedule_layout
from services.rendering import apply_filter, render_schedule
from services.schedule import ScheduleLayout, build_schedule
from services.talk_store import TALKS_ERROR_MESSAGE, TalkDataError, load_talks, read_talks_bytes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Talks"])

_error_responses = {500: {"model": ErrorResponse}}


def _talks_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": TALKS_ERROR_MESSAGE})


@router.get("/talks", responses=_error_responses)
async def get_talks(settings: Settings = Depends(get_config)):
    """
    Return the talk data file verbatim.

    Returns:
        JSON array of talks, or 500 with an error body if the file is unreadable
    """
    try:
        data = await asyncio.to_thread(read_talks_bytes, settings.talks_path)
    except TalkDataError as e:
        logger.error(f"Talk data read failed: {e}")
        return _talks_error()

    return Response(content=data, media_type="application/json")


@router.get(
    "/schedule",
    response_model=list[ScheduleEntryResponse],
    responses=_error_responses,
)
async def get_schedule(
    search: str = Query("", description="Case-insensitive category filter"),
    settings: Settings = Depends(get_config),
    layout: ScheduleLayout = Depends(get_schedule_layout),
):
    """
    Lay out the schedule and render its nodes.

    Args:
        search: Category search term; talks not matching are marked invisible

    Returns:
        Schedule entries in chronological order
    """
    try:
        talks = await asyncio.to_thread(load_talks, settings.talks_path)
    except TalkDataError as e:
        logger.error(f"Talk data load failed: {e}")
        return _talks_error()

    nodes = render_schedule(build_schedule(talks, layout=layout))
    nodes = apply_filter(nodes, talks, search)

    return [
        ScheduleEntryResponse(
            kind=node.entry.kind.value,
            label=node.entry.label,
            talk_id=node.talk_id,
            start=node.entry.start,
            end=node.entry.end,
            time_range=node.entry.time_range,
            html=node.html,
            visible=not node.hidden,
        )
        for node in nodes
    ]
