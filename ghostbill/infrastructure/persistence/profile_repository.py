from typing import Any, Dict, Optional
from uuid import UUID
from ghostbill.domain.schemas.profile import ProfileDB
from ghostbill.domain.schemas.database import SessionLocal

class ProfileRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, user_id: UUID) -> Optional[ProfileDB]:
        with self.session_factory() as db:
            return db.query(ProfileDB).filter(ProfileDB.user_id == user_id).first()

    def upsert(self, user_id: UUID, values: Dict[str, Any]) -> ProfileDB:
        """Patch the user's profile row, creating it when missing."""
        with self.session_factory() as db:
            p = db.query(ProfileDB).filter(ProfileDB.user_id == user_id).first()
            if p is None:
                p = ProfileDB(user_id=user_id)
                db.add(p)
            for k, v in values.items():
                setattr(p, k, v)
            db.commit()
            db.refresh(p)
            return p
