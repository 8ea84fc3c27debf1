"""
Projects Router - Volunteer project tracking.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response

from sandwich.data import ProjectRepository

from ..dependencies import get_project_repository
from ..schemas import DEFAULT_ASSIGNEE, ProjectClaim, ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(repository: ProjectRepository = Depends(get_project_repository)) -> list[ProjectResponse]:
    try:
        projects = await asyncio.to_thread(repository.get_all)
    except Exception as e:
        logger.error(f"Error fetching projects: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch projects")

    return [ProjectResponse.from_domain(project) for project in projects]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreate, repository: ProjectRepository = Depends(get_project_repository)
) -> ProjectResponse:
    try:
        project = await asyncio.to_thread(repository.create, body.model_dump())
    except Exception as e:
        logger.error(f"Failed to create project: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create project")

    logger.info(f"Created project {project.id}: {project.title}")
    return ProjectResponse.from_domain(project)


@router.post("/{project_id}/claim", response_model=ProjectResponse)
async def claim_project(
    project_id: Annotated[int, Path(description="Project ID")],
    body: ProjectClaim | None = None,
    repository: ProjectRepository = Depends(get_project_repository),
) -> ProjectResponse:
    """Mark a project in progress for the claiming volunteer."""
    assignee = (body.assignee_name if body else None) or DEFAULT_ASSIGNEE
    try:
        project = await asyncio.to_thread(repository.claim, project_id, assignee)
    except Exception as e:
        logger.error(f"Failed to claim project {project_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to claim project")

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse.from_domain(project)


@router.api_route("/{project_id}", methods=["PUT", "PATCH"], response_model=ProjectResponse)
async def update_project(
    project_id: Annotated[int, Path(description="Project ID")],
    body: ProjectUpdate,
    repository: ProjectRepository = Depends(get_project_repository),
) -> ProjectResponse:
    try:
        project = await asyncio.to_thread(repository.update, project_id, body.model_dump(exclude_unset=True))
    except Exception as e:
        logger.error(f"Failed to update project {project_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update project")

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse.from_domain(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: Annotated[int, Path(description="Project ID")],
    repository: ProjectRepository = Depends(get_project_repository),
) -> Response:
    try:
        deleted = await asyncio.to_thread(repository.delete, project_id)
    except Exception as e:
        logger.error(f"Failed to delete project {project_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete project")

    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=204)
