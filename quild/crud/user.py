from sqlalchemy.orm import Session

from quild.crud.base import CRUDBase
from quild.models.user import User
from quild.schemas.user import UserCreate, UserUpdate

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_external_id(self, db: Session, *, external_id: str) -> User | None:
        return db.query(User).filter(User.external_id == external_id).first()


user = CRUDUser(User)
