from datetime import date as Date, datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Query
from ghostbill.domain.schemas.transaction import TransactionDB
from ghostbill.domain.schemas.database import SessionLocal

class TransactionRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create(self, t: TransactionDB) -> TransactionDB:
        with self.session_factory() as db:
            db.add(t)
            db.commit()
            db.refresh(t)
            return t

    def get(self, user_id: UUID, id_: UUID) -> Optional[TransactionDB]:
        with self.session_factory() as db:
            return (
                db.query(TransactionDB)
                .filter(TransactionDB.user_id == user_id, TransactionDB.id == id_)
                .first()
            )

    def update(self, t: TransactionDB) -> TransactionDB:
        with self.session_factory() as db:
            merged = db.merge(t)
            db.commit()
            db.refresh(merged)
            return merged

    def delete(self, t: TransactionDB) -> None:
        with self.session_factory() as db:
            db.delete(db.merge(t))
            db.commit()

    def list(
        self,
        user_id: UUID,
        start: Optional[Date] = None,
        end: Optional[Date] = None,
        income: Optional[bool] = None,
        spend_only: bool = False,
        category: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[TransactionDB]:
        """
        Rows owned by the user, optionally bounded to [start, end).

        income=True keeps income rows, income=False drops them. spend_only keeps
        non-income rows with a negative amount.
        """
        with self.session_factory() as db:
            q = db.query(TransactionDB).filter(TransactionDB.user_id == user_id)
            q = self._bound(q, TransactionDB.date, start, end)
            if income is True:
                q = q.filter(TransactionDB.type == "income")
            elif income is False or spend_only:
                q = q.filter((TransactionDB.type.is_(None)) | (TransactionDB.type != "income"))
            if spend_only:
                q = q.filter(TransactionDB.amount < 0)
            if category is not None:
                q = q.filter(TransactionDB.category.ilike(category))
            order = TransactionDB.date.desc() if newest_first else TransactionDB.date.asc()
            return q.order_by(order, TransactionDB.created_at.desc()).all()

    def count_created_between(self, user_id: UUID, start: datetime, end: datetime) -> int:
        with self.session_factory() as db:
            q = db.query(TransactionDB).filter(TransactionDB.user_id == user_id)
            return self._bound(q, TransactionDB.created_at, start, end).count()

    @staticmethod
    def _bound(q: Query, column, start, end) -> Query:
        if start is not None:
            q = q.filter(column >= start)
        if end is not None:
            q = q.filter(column < end)
        return q
