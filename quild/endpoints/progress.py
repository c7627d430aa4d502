from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quild.models.progress import UserProgress as UserProgressModel
from quild.models.user import User
from quild.schemas.progress import CompletedResources, Dashboard, ProgressStats, UserProgress
from quild.schemas.response import APIResponse
from quild.services.progress import progress_service
from quild.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[UserProgress])
def get_progress(progress: UserProgressModel = Depends(deps.get_current_progress)):
    return APIResponse(message="Progress retrieved successfully", data=UserProgress.model_validate(progress))


@router.get("/stats", response_model=APIResponse[ProgressStats])
def get_progress_stats(
    db: Session = Depends(deps.get_db),
    progress: UserProgressModel = Depends(deps.get_current_progress),
):
    stats = progress_service.get_stats(db, progress=progress)
    return APIResponse(message="Progress stats retrieved successfully", data=stats)


@router.get("/dashboard", response_model=APIResponse[Dashboard])
async def get_dashboard(
    db: Session = Depends(deps.get_db),
    user: User = Depends(deps.get_current_user),
    progress: UserProgressModel = Depends(deps.get_current_progress),
):
    dashboard = await progress_service.get_dashboard(db, progress=progress, user=user)
    return APIResponse(message="Dashboard retrieved successfully", data=dashboard)


@router.get("/resources", response_model=APIResponse[CompletedResources])
def get_completed_resources(progress: UserProgressModel = Depends(deps.get_current_progress)):
    return APIResponse(
        message="Completed resources retrieved successfully",
        data=CompletedResources(completed_resources=progress.completed_resource_ids),
    )


@router.post("/resources/{resource_id}/toggle", response_model=APIResponse[CompletedResources])
def toggle_resource(
    *,
    db: Session = Depends(deps.get_db),
    resource_id: int,
    progress: UserProgressModel = Depends(deps.get_current_progress),
):
    completed = progress_service.toggle_resource(db, progress=progress, resource_id=resource_id)
    return APIResponse(
        message="Resource progress updated successfully",
        data=CompletedResources(completed_resources=completed),
    )
