from datetime import date as Date, datetime, time, timezone
from typing import Optional
from uuid import UUID

from ghostbill import conf
from ghostbill.core import calendar_math
from ghostbill.core.recurrence import today
from ghostbill.domain.models.dtos import FreeQuota
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository


class TransactionCheckerService:
    """Free-tier quota: how many transactions a user created this month."""

    def __init__(self, repo: Optional[TransactionRepository] = None):
        self.repo = repo or TransactionRepository()

    def monthly_transaction_count(self, user_id: UUID, month: Optional[Date] = None) -> int:
        start, end = calendar_math.month_bounds(month or today())
        return self.repo.count_created_between(
            user_id,
            datetime.combine(start, time.min, tzinfo=timezone.utc),
            datetime.combine(end, time.min, tzinfo=timezone.utc),
        )

    def remaining_free_transactions(
        self,
        user_id: UUID,
        month: Optional[Date] = None,
        max_free: int = conf.MAX_FREE_TRANSACTIONS,
    ) -> int:
        """Remaining free transactions this month (never less than 0)."""
        return max(0, max_free - self.monthly_transaction_count(user_id, month))

    def quota(self, user_id: UUID, month: Optional[Date] = None, max_free: int = conf.MAX_FREE_TRANSACTIONS) -> FreeQuota:
        used = self.monthly_transaction_count(user_id, month)
        return FreeQuota(used=used, remaining=max(0, max_free - used), max_free=max_free)
