from collections import Counter
from typing import List, Optional
from uuid import UUID

from ghostbill.core import calendar_math
from ghostbill.domain.models.dtos import TxMonth
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository


class FilterTransactionsService:
    def __init__(self, repo: Optional[TransactionRepository] = None):
        self.repo = repo or TransactionRepository()

    def months_with_activity(self, user_id: UUID) -> List[TxMonth]:
        """Months holding at least one transaction, newest first, with row counts."""
        counts = Counter(calendar_math.month_start(t.date) for t in self.repo.list(user_id))
        return [TxMonth(month_start=m, count=n) for m, n in sorted(counts.items(), reverse=True)]
