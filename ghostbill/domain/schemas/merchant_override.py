from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, UniqueConstraint, Uuid
import uuid
from ghostbill.domain.schemas.database import Base


class MerchantOverrideDB(Base):
    """A user's correction for one normalized merchant name."""
    __tablename__ = "merchant_overrides"
    __table_args__ = (UniqueConstraint("user_id", "merchant_key", name="uq_merchant_overrides_user_key"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    merchant_key = Column(String, nullable=False)

    # Either may be set on its own: a category pick or a display-name fix
    category = Column(String, nullable=True)
    display_name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
