from typing import List, Optional
from uuid import UUID
from ghostbill.domain.schemas.recurring_transaction import RecurringTransactionDB
from ghostbill.domain.schemas.database import SessionLocal
from ghostbill.domain.models.enums.status import RecurrenceStatus

class RecurringTransactionRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create(self, r: RecurringTransactionDB) -> RecurringTransactionDB:
        with self.session_factory() as db:
            db.add(r)
            db.commit()
            db.refresh(r)
            return r

    def get(self, user_id: UUID, id_: UUID) -> Optional[RecurringTransactionDB]:
        with self.session_factory() as db:
            return (
                db.query(RecurringTransactionDB)
                .filter(RecurringTransactionDB.user_id == user_id, RecurringTransactionDB.id == id_)
                .first()
            )

    def list(self, user_id: UUID) -> List[RecurringTransactionDB]:
        with self.session_factory() as db:
            return (
                db.query(RecurringTransactionDB)
                .filter(RecurringTransactionDB.user_id == user_id)
                .order_by(RecurringTransactionDB.next_date.asc())
                .all()
            )

    def list_due(self, cutoff: str, user_id: Optional[UUID] = None, inclusive: bool = True) -> List[RecurringTransactionDB]:
        """Active rows whose next_date is on/before cutoff (YYYY-MM-DD sorts lexically)."""
        with self.session_factory() as db:
            q = db.query(RecurringTransactionDB).filter(
                RecurringTransactionDB.status == RecurrenceStatus.active.value
            )
            if user_id is not None:
                q = q.filter(RecurringTransactionDB.user_id == user_id)
            if inclusive:
                q = q.filter(RecurringTransactionDB.next_date <= cutoff)
            else:
                q = q.filter(RecurringTransactionDB.next_date < cutoff)
            return q.order_by(RecurringTransactionDB.next_date.asc()).all()

    def update(self, r: RecurringTransactionDB) -> RecurringTransactionDB:
        with self.session_factory() as db:
            merged = db.merge(r)
            db.commit()
            db.refresh(merged)
            return merged

    def delete(self, r: RecurringTransactionDB) -> None:
        with self.session_factory() as db:
            db.delete(db.merge(r))
            db.commit()
