import re
from datetime import date as Date, datetime, timedelta
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ghostbill.core.recurrence import parse_date_only
from ghostbill.domain.models.enums.frequency import Frequency
from ghostbill.domain.models.enums.status import RecurrenceStatus
from ghostbill.domain.models.enums.category import ExpenseCategory

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def _normalize_time(value: Optional[str]) -> Optional[str]:
    """Accept HH:MM or HH:MM:SS and store HH:MM."""
    if value is None:
        return None
    m = _TIME_RE.match(value.strip())
    if not m or int(m.group(1)) > 23 or int(m.group(2)) > 59:
        raise ValueError(f"Invalid time: {value}, expected HH:MM")
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def _check_date_only(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if parse_date_only(value) is None:
        raise ValueError(f"Invalid date format '{value}', expected YYYY-MM-DD")
    return value


# ---------- Profiles ----------

class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    currency: Optional[str] = None
    seen_home_tour: bool = False
    seen_recurring_tour: bool = False
    seen_savings_tour: bool = False
    seen_analytics_tour: bool = False


class TourFlagUpdate(BaseModel):
    seen: bool = True


class CurrencyUpdate(BaseModel):
    currency: str = Field(..., min_length=3, max_length=3, examples=["EUR"])

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value):
        return value.upper()


# ---------- Transactions ----------

class TransactionBase(BaseModel):
    amount: float = Field(..., examples=[-12.5])
    currency: str = Field(..., min_length=3, max_length=3, examples=["USD"])
    date: Date
    merchant: Optional[str] = None
    category: Optional[ExpenseCategory] = None
    note: Optional[str] = None


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(BaseModel):
    amount: Optional[float] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    date: Optional[Date] = None
    merchant: Optional[str] = None
    category: Optional[ExpenseCategory] = None
    note: Optional[str] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: float
    currency: str
    date: Date
    merchant: Optional[str] = None
    category: Optional[str] = None
    note: Optional[str] = None
    type: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class IncomeCreate(BaseModel):
    amount: float = Field(..., examples=[4200.0])
    month: Optional[Date] = Field(default=None, description="Any day in the reported month; defaults to the current month")
    note: Optional[str] = None


# ---------- Recurring transactions ----------

class RecurringTransactionBase(BaseModel):
    merchant_name: str = Field(..., min_length=1, examples=["Netflix"])
    amount: float = Field(..., examples=[15.99])
    category: Optional[str] = None
    frequency: Frequency = Frequency.monthly
    start_date: str = Field(..., examples=["2025-01-31"])
    next_date: Optional[str] = None
    status: RecurrenceStatus = RecurrenceStatus.active
    notifications_enabled: bool = False
    notify_lead_days: Optional[int] = Field(default=None, ge=0)
    notify_time: Optional[str] = Field(default=None, examples=["09:00"])

    @field_validator("start_date", "next_date")
    @classmethod
    def validate_date_only(cls, value):
        return _check_date_only(value)

    @field_validator("notify_time")
    @classmethod
    def validate_notify_time(cls, value):
        return _normalize_time(value)

    @field_validator("frequency", mode="before")
    @classmethod
    def lenient_frequency(cls, value):
        return Frequency.parse(value)


class RecurringTransactionCreate(RecurringTransactionBase):
    @model_validator(mode="after")
    def apply_defaults(self):
        if self.next_date is None:
            self.next_date = self.start_date
        # Reminder details are only kept when reminders are on
        if not self.notifications_enabled:
            self.notify_lead_days = None
            self.notify_time = None
        return self


class RecurringTransactionUpdate(BaseModel):
    merchant_name: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = None
    category: Optional[str] = None
    frequency: Optional[Frequency] = None
    start_date: Optional[str] = None
    next_date: Optional[str] = None
    status: Optional[RecurrenceStatus] = None
    notifications_enabled: Optional[bool] = None
    notify_lead_days: Optional[int] = Field(default=None, ge=0)
    notify_time: Optional[str] = None

    @field_validator("start_date", "next_date")
    @classmethod
    def validate_date_only(cls, value):
        return _check_date_only(value)

    @field_validator("notify_time")
    @classmethod
    def validate_notify_time(cls, value):
        return _normalize_time(value)

    @field_validator("frequency", mode="before")
    @classmethod
    def lenient_frequency(cls, value):
        return None if value is None else Frequency.parse(value)


class RecurringTransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    merchant_name: str
    amount: float
    category: Optional[str] = None
    frequency: str
    start_date: str
    next_date: str
    status: str
    notifications_enabled: bool
    notify_lead_days: Optional[int] = None
    notify_time: Optional[str] = None
    notify_on: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def compute_notify_on(self):
        if self.notifications_enabled and self.notify_lead_days is not None:
            nxt = parse_date_only(self.next_date)
            if nxt is not None:
                self.notify_on = (nxt - timedelta(days=self.notify_lead_days)).isoformat()
        return self


class ConsumedOccurrence(BaseModel):
    transaction: TransactionOut
    recurring: RecurringTransactionOut


# ---------- Categorizer ----------

class SuggestRequest(BaseModel):
    merchant: Optional[str] = Field(default=None, examples=["STARBUCKS #1234"])
    text: str = Field(default="", description="Receipt or note text")


class CategorySuggestion(BaseModel):
    category: ExpenseCategory
    confidence: int = Field(..., ge=0, le=10, description=">=7 strong, 4-6 medium, <4 falls back to other")
    merchant_key: str = ""
    overridden: bool = False


class MerchantCorrection(BaseModel):
    name: str
    confidence: int = Field(..., ge=0, le=10)


class MerchantCategoryOverride(BaseModel):
    merchant: str = Field(..., min_length=1)
    category: ExpenseCategory


class MerchantDisplayOverride(BaseModel):
    merchant: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1, examples=["Tim Hortons"])


class MerchantOverrideOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    merchant_key: str
    category: Optional[str] = None
    display_name: Optional[str] = None


# ---------- Feedback ----------

class FeedbackCreate(BaseModel):
    message: str = Field(..., examples=["Love the ghost!"])
    email: Optional[str] = None


class FeedbackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    message: str
    email: Optional[str] = None
    created_at: datetime


# ---------- Analytics ----------

class MonthlySavings(BaseModel):
    income: float
    spending: float
    savings: float
    month_start: Date
    month_end: Date


class SavingsCard(MonthlySavings):
    has_income: bool
    currency: str


class SavingsPoint(BaseModel):
    month_start: Date
    savings: float


class SavingsHistory(BaseModel):
    reported: list[SavingsPoint]
    unreported: list[Date]


class TopExpense(BaseModel):
    id: UUID
    merchant: Optional[str] = None
    date: Date
    amount: float
    currency: str


class TopMerchantCount(BaseModel):
    merchant: str
    count: int


class TopCategoryCount(BaseModel):
    category: ExpenseCategory
    count: int


class TopCategoryAmount(BaseModel):
    category: ExpenseCategory
    total: float


class SpendingPoint(BaseModel):
    month_start: Date
    total: float


class TxMonth(BaseModel):
    month_start: Date
    count: int


class FreeQuota(BaseModel):
    used: int
    remaining: int
    max_free: int
