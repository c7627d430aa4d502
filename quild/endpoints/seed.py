from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quild.core.config import settings
from quild.schemas.response import APIResponse
from quild.schemas.seed import SeedResult
from quild.services.seed import seed_service
from quild.utils import deps

router = APIRouter()


@router.post("", response_model=APIResponse[SeedResult])
def seed_database(db: Session = Depends(deps.get_db)):
    if not settings.SEED_ENABLED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    result = seed_service.seed_database(db)
    return APIResponse(message="Database seeded successfully!", data=result)
