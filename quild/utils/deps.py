from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from quild.core.database import SessionLocal
from quild.core.security import decode_session_token
from quild.models.progress import UserProgress
from quild.models.user import User
from quild.services.identity import identity_service
from quild.services.progress import progress_service

http_bearer = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_external_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_session_token(credentials.credentials)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    external_id = payload.get("sub")
    if not external_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return external_id

async def get_current_user(
    db: Session = Depends(get_db),
    external_id: str = Depends(get_current_external_id),
) -> User:
    return await identity_service.ensure_user(db, external_id)

async def get_current_progress(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> UserProgress:
    return await progress_service.ensure_progress(db, user)
