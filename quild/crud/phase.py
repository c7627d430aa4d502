from sqlalchemy.orm import Session
from typing import List, Optional

from quild.crud.base import CRUDBase
from quild.models.phase import Phase
from quild.schemas.phase import PhaseCreate, PhaseUpdate

class CRUDPhase(CRUDBase[Phase, PhaseCreate, PhaseUpdate]):

    def _query_active(self, db: Session):
        return db.query(Phase).filter(Phase.is_active == True)

    def get_active(self, db: Session) -> List[Phase]:
        return self._query_active(db).order_by(Phase.order).all()

    def get_first_active(self, db: Session) -> Optional[Phase]:
        return self._query_active(db).order_by(Phase.order).first()

    def get_active_after(self, db: Session, *, order: int) -> List[Phase]:
        return self._query_active(db).filter(Phase.order > order).order_by(Phase.order).all()

    def count_active(self, db: Session) -> int:
        return self._query_active(db).count()

    def count(self, db: Session) -> int:
        return db.query(Phase).count()


phase = CRUDPhase(Phase)
