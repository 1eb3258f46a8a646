from ghostbill.domain.schemas.feedback import FeedbackDB
from ghostbill.domain.schemas.database import SessionLocal

class FeedbackRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create(self, f: FeedbackDB) -> FeedbackDB:
        with self.session_factory() as db:
            db.add(f)
            db.commit()
            db.refresh(f)
            return f
