from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quild.models.user import User as UserModel
from quild.schemas.response import APIResponse
from quild.schemas.user import User
from quild.services.identity import identity_service
from quild.utils import deps

router = APIRouter()


@router.get("/me", response_model=APIResponse[User])
def get_me(user: UserModel = Depends(deps.get_current_user)):
    return APIResponse(message="User retrieved successfully", data=User.model_validate(user))


@router.post("/me/sync", response_model=APIResponse[User])
async def sync_me(
    db: Session = Depends(deps.get_db),
    user: UserModel = Depends(deps.get_current_user),
):
    synced = await identity_service.sync_user(db, user)
    return APIResponse(message="User synced successfully", data=User.model_validate(synced))
