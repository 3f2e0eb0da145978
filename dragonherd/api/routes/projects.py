"""Project configuration routes."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ...container import get_container
from ...domain.models import ProjectConfig

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectResponse(BaseModel):
    """Project response model."""

    id: str
    name: str
    description: str = ""
    active: bool
    created_at: str
    updated_at: str


class ProjectListResponse(BaseModel):
    """Project list response model."""

    projects: list[ProjectResponse]
    total: int


class ProjectCreateRequest(BaseModel):
    """Project creation request model."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    active: bool = True


def project_to_response(project: ProjectConfig) -> ProjectResponse:
    """Convert ProjectConfig to ProjectResponse."""
    return ProjectResponse(**project.to_dict())


@router.get("", response_model=ProjectListResponse)
async def list_projects() -> ProjectListResponse:
    """List configured projects."""
    projects = get_container().dragonherd_settings.get_projects()
    return ProjectListResponse(
        projects=[project_to_response(p) for p in projects.values()],
        total=len(projects),
    )


@router.post("", response_model=ProjectResponse, status_code=201)
async def save_project(request: ProjectCreateRequest) -> ProjectResponse:
    """Add or update a project."""
    settings = get_container().dragonherd_settings
    if not settings.add_project(request.model_dump()):
        raise HTTPException(400, "Project id and name are required")
    return project_to_response(settings.get_projects()[request.id.strip()])


@router.delete("/{project_id}")
async def remove_project(project_id: str) -> dict:
    """Remove a project."""
    if not get_container().dragonherd_settings.remove_project(project_id):
        raise HTTPException(404, f"Project not found: {project_id}")
    return {"success": True, "message": "Project removed"}
