from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Text, Uuid
import uuid
from ghostbill.domain.schemas.database import Base


class FeedbackDB(Base):
    __tablename__ = "feedback"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    message = Column(Text, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
