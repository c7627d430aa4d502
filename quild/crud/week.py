from sqlalchemy.orm import Session
from typing import List, Optional

from quild.crud.base import CRUDBase
from quild.models.week import Week
from quild.schemas.week import WeekCreate, WeekUpdate

class CRUDWeek(CRUDBase[Week, WeekCreate, WeekUpdate]):

    def _query_active(self, db: Session):
        return db.query(Week).filter(Week.is_active == True)

    def get_active(self, db: Session, *, phase_id: Optional[int] = None) -> List[Week]:
        query = self._query_active(db)
        if phase_id is not None:
            query = query.filter(Week.phase_id == phase_id)
        return query.order_by(Week.week_number, Week.id).all()

    def get_active_by_phase(self, db: Session, *, phase_id: int) -> List[Week]:
        return self.get_active(db, phase_id=phase_id)

    def get_first_active_in_phase(self, db: Session, *, phase_id: int) -> Optional[Week]:
        return (
            self._query_active(db)
            .filter(Week.phase_id == phase_id)
            .order_by(Week.week_number)
            .first()
        )

    def get_active_in_phase_after(self, db: Session, *, phase_id: int, week_number: int) -> List[Week]:
        return (
            self._query_active(db)
            .filter(Week.phase_id == phase_id, Week.week_number > week_number)
            .order_by(Week.week_number)
            .all()
        )

    def count_active(self, db: Session) -> int:
        return self._query_active(db).count()


week = CRUDWeek(Week)
