from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
import uuid
from ghostbill.domain.schemas.database import Base


class ProfileDB(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, unique=True, nullable=False, index=True)
    currency = Column(String(3), nullable=True)

    # Feature-tour flags, one per tab
    seen_home_tour = Column(Boolean, default=False, nullable=False)
    seen_recurring_tour = Column(Boolean, default=False, nullable=False)
    seen_savings_tour = Column(Boolean, default=False, nullable=False)
    seen_analytics_tour = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
