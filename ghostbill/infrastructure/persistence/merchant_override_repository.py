from typing import Any, Dict, List, Optional
from uuid import UUID
from ghostbill.domain.schemas.merchant_override import MerchantOverrideDB
from ghostbill.domain.schemas.database import SessionLocal

class MerchantOverrideRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, user_id: UUID, merchant_key: str) -> Optional[MerchantOverrideDB]:
        with self.session_factory() as db:
            return (
                db.query(MerchantOverrideDB)
                .filter(MerchantOverrideDB.user_id == user_id, MerchantOverrideDB.merchant_key == merchant_key)
                .first()
            )

    def list(self, user_id: UUID) -> List[MerchantOverrideDB]:
        with self.session_factory() as db:
            return (
                db.query(MerchantOverrideDB)
                .filter(MerchantOverrideDB.user_id == user_id)
                .order_by(MerchantOverrideDB.merchant_key.asc())
                .all()
            )

    def upsert(self, user_id: UUID, merchant_key: str, values: Dict[str, Any]) -> MerchantOverrideDB:
        with self.session_factory() as db:
            o = (
                db.query(MerchantOverrideDB)
                .filter(MerchantOverrideDB.user_id == user_id, MerchantOverrideDB.merchant_key == merchant_key)
                .first()
            )
            if o is None:
                o = MerchantOverrideDB(user_id=user_id, merchant_key=merchant_key)
                db.add(o)
            for k, v in values.items():
                setattr(o, k, v)
            db.commit()
            db.refresh(o)
            return o

    def delete(self, o: MerchantOverrideDB) -> None:
        with self.session_factory() as db:
            db.delete(db.merge(o))
            db.commit()
