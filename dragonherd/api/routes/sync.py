"""On-demand sync and summary routes."""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...container import get_container
from ...services.sync_service import SUMMARY_UNAVAILABLE

router = APIRouter(prefix="/sync", tags=["sync"])


class SummaryResponse(BaseModel):
    """Summary response model."""

    project_id: str
    summary: str


class FilteredSummaryRequest(BaseModel):
    """Filtered summary request model."""

    project_id: str = Field(min_length=1)
    status: str = ""
    user_id: int = Field(default=0, ge=0)
    keyword: str = ""


class SyncResultResponse(BaseModel):
    """One stored sync result."""

    summary: str
    timestamp: str


class SyncStatusResponse(BaseModel):
    """Scheduler status response model."""

    schedule: str
    last_sync: Optional[str] = None
    next_sync: Optional[str] = None
    is_scheduled: bool
    schedule_display: str
    sync_results: dict[str, list[SyncResultResponse]] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    """Generic acknowledgement."""

    success: bool
    message: str


@router.post("/run", response_model=SummaryResponse)
async def run_default_sync() -> SummaryResponse:
    """Summarize the default project without filters."""
    orchestrator = get_container().on_demand_orchestrator()
    summary = await orchestrator.run()
    return SummaryResponse(
        project_id=orchestrator.default_project_id,
        summary=summary or SUMMARY_UNAVAILABLE,
    )


@router.post("/filtered", response_model=SummaryResponse)
async def run_filtered_sync(request: FilteredSummaryRequest) -> SummaryResponse:
    """Summarize a project's tasks matching the given filters."""
    orchestrator = get_container().on_demand_orchestrator()
    summary = await orchestrator.run_filtered(
        request.project_id,
        status=request.status,
        user_id=request.user_id,
        keyword=request.keyword,
    )
    return SummaryResponse(project_id=request.project_id, summary=summary)


@router.post("/trigger", response_model=MessageResponse)
async def trigger_manual_sync() -> MessageResponse:
    """Queue an immediate scheduled sync."""
    started = get_container().sync_scheduler.trigger_manual_sync()
    return MessageResponse(success=started, message="Manual sync started.")


@router.get("/status", response_model=SyncStatusResponse)
async def get_sync_status() -> SyncStatusResponse:
    """Schedule, run times and stored results."""
    return SyncStatusResponse(**get_container().sync_scheduler.get_sync_status())


@router.delete("/schedules", response_model=MessageResponse)
async def clear_all_schedules() -> MessageResponse:
    """Remove the sync schedule and all stored results."""
    get_container().sync_scheduler.clear_all_schedules()
    return MessageResponse(success=True, message="All schedules and sync results cleared.")
