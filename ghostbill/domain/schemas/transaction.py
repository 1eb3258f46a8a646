from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, Date, DateTime, Text, Uuid
import uuid
from ghostbill.domain.schemas.database import Base


class TransactionDB(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)

    # Spend is stored negative, income positive
    amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False)
    date = Column(Date, nullable=False, index=True)

    merchant = Column(String, nullable=True)
    category = Column(String, nullable=True)
    note = Column(Text, nullable=True)
    type = Column(String, nullable=True)  # "income" or NULL

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
