from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, Boolean, Integer, DateTime, Uuid
import uuid
from ghostbill.domain.schemas.database import Base
from ghostbill.domain.models.enums.frequency import Frequency
from ghostbill.domain.models.enums.status import RecurrenceStatus


class RecurringTransactionDB(Base):
    __tablename__ = "recurring_transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    merchant_name = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=True)

    # Stored as text tokens / YYYY-MM-DD text; the scheduler owns their parsing
    frequency = Column(String, nullable=False, default=Frequency.monthly.value)
    start_date = Column(String(10), nullable=False)
    next_date = Column(String(10), nullable=False, index=True)
    status = Column(String, nullable=False, default=RecurrenceStatus.active.value)

    # Reminder settings, persisted only
    notifications_enabled = Column(Boolean, default=False, nullable=False)
    notify_lead_days = Column(Integer, nullable=True)
    notify_time = Column(String(5), nullable=True)  # "HH:MM"

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
