"""Transactions, savings aggregates, category tallies, month filters and quota."""

# pylint: disable=redefined-outer-name

from datetime import date

import pytest
from fastapi import HTTPException

from ghostbill import conf
from ghostbill.core.category_service import CategoryService
from ghostbill.core.filter_service import FilterTransactionsService
from ghostbill.core.transaction_checker_service import TransactionCheckerService
from ghostbill.domain.models.dtos import IncomeCreate, TransactionCreate, TransactionUpdate
from ghostbill.domain.models.enums.category import ExpenseCategory
from ghostbill.domain.schemas.transaction import TransactionDB


def _spend(service, user_id, amount, day, merchant=None, category=None):
    return service.create(user_id, TransactionCreate(
        amount=amount, currency="USD", date=day, merchant=merchant, category=category,
    ))


@pytest.fixture
def march(transactions_service, user_id):
    """March 2024: 3000 income, 150 spend, one refund. February: activity only."""
    transactions_service.insert_income_for_month(user_id, IncomeCreate(amount=3000, month=date(2024, 3, 15)))
    _spend(transactions_service, user_id, -100, date(2024, 3, 5), "Whole Foods", "groceries")
    _spend(transactions_service, user_id, -50, date(2024, 3, 20), "Starbucks", "coffee")
    _spend(transactions_service, user_id, 20, date(2024, 3, 21), "Refund")
    _spend(transactions_service, user_id, -10, date(2024, 2, 2), "Starbucks", "coffee")


# =============================================================================
# CRUD
# =============================================================================


def test_update_patches_only_sent_fields(transactions_service, user_id):
    t = _spend(transactions_service, user_id, -12.5, date(2024, 5, 1), "Cafe", "coffee")

    updated = transactions_service.update(user_id, t.id, TransactionUpdate(note="with Sam"))

    assert updated.note == "with Sam"
    assert updated.amount == -12.5
    assert updated.category == "coffee"


def test_update_ignores_null_for_required_fields(transactions_service, user_id):
    t = _spend(transactions_service, user_id, -12.5, date(2024, 5, 1), "Cafe", "coffee")

    updated = transactions_service.update(
        user_id, t.id, TransactionUpdate(amount=None, currency=None, date=None, category=None),
    )

    assert (updated.amount, updated.currency, updated.date) == (-12.5, "USD", date(2024, 5, 1))
    assert updated.category is None


def test_delete_then_get_is_404(transactions_service, user_id):
    t = _spend(transactions_service, user_id, -1, date(2024, 5, 1))
    transactions_service.delete(user_id, t.id)

    with pytest.raises(HTTPException) as exc:
        transactions_service.get(user_id, t.id)
    assert exc.value.status_code == 404


def test_insert_income_for_month(transactions_service, user_id):
    t = transactions_service.insert_income_for_month(user_id, IncomeCreate(amount=-2500, month=date(2024, 6, 18)))

    assert t.amount == 2500
    assert t.date == date(2024, 6, 1)
    assert t.type == "income"
    assert t.merchant == "Income"
    assert t.note == "Reported income for June 2024"
    assert t.currency == conf.DEFAULT_CURRENCY


def test_insert_income_rejects_zero(transactions_service, user_id):
    with pytest.raises(HTTPException) as exc:
        transactions_service.insert_income_for_month(user_id, IncomeCreate(amount=0))
    assert exc.value.status_code == 422


def test_income_uses_profile_currency(transactions_service, profiles_service, user_id):
    profiles_service.set_currency(user_id, "eur")

    t = transactions_service.insert_income_for_month(user_id, IncomeCreate(amount=10, month=date(2024, 1, 1)))

    assert t.currency == "EUR"


# =============================================================================
# Savings
# =============================================================================


@pytest.mark.usefixtures("march")
def test_monthly_savings(transactions_service, user_id):
    ms = transactions_service.monthly_savings(user_id, date(2024, 3, 1))

    assert ms.income == 3000
    assert ms.spending == 150
    assert ms.savings == 2850
    assert (ms.month_start, ms.month_end) == (date(2024, 3, 1), date(2024, 4, 1))


@pytest.mark.usefixtures("march")
def test_savings_card_without_income_is_zeroed(transactions_service, user_id):
    card = transactions_service.savings_card(user_id, date(2024, 2, 10))

    assert card.has_income is False
    assert (card.income, card.spending, card.savings) == (0, 0, 0)


@pytest.mark.usefixtures("march")
def test_savings_history(transactions_service, user_id):
    history = transactions_service.savings_history(user_id, months_back=3, now=date(2024, 4, 10))

    assert [(p.month_start, p.savings) for p in history.reported] == [(date(2024, 3, 1), 2850)]
    assert history.unreported == [date(2024, 2, 1)]


# =============================================================================
# Top lists
# =============================================================================


@pytest.mark.usefixtures("march")
def test_top_expenses_sorted_by_absolute_amount(transactions_service, user_id):
    top = transactions_service.top_expenses(user_id, limit=2)

    assert [(t.merchant, t.amount) for t in top] == [("Whole Foods", 100), ("Starbucks", 50)]


def test_top_merchants_case_insensitive(transactions_service, user_id):
    _spend(transactions_service, user_id, -3, date(2024, 1, 1), "Starbucks")
    _spend(transactions_service, user_id, -4, date(2024, 1, 2), " starbucks ")
    _spend(transactions_service, user_id, -5, date(2024, 1, 3), "Target")
    _spend(transactions_service, user_id, -6, date(2024, 1, 4), "   ")
    transactions_service.insert_income_for_month(user_id, IncomeCreate(amount=1, month=date(2024, 1, 1)))

    top = transactions_service.top_merchants_by_count(user_id)

    assert [(m.merchant, m.count) for m in top] == [("Starbucks", 2), ("Target", 1)]


# =============================================================================
# Categories
# =============================================================================


@pytest.mark.usefixtures("march")
def test_category_tallies(tx_repo, user_id):
    tx_repo.create(TransactionDB(user_id=user_id, amount=-7, currency="USD", date=date(2024, 3, 9), category="Mystery"))
    service = CategoryService(tx_repo)

    counts = {c.category: c.count for c in service.top_categories_by_count(user_id)}
    totals = service.top_categories_by_amount(user_id, limit=1)

    assert counts == {ExpenseCategory.coffee: 2, ExpenseCategory.groceries: 1, ExpenseCategory.other: 1}
    assert [(t.category, t.total) for t in totals] == [(ExpenseCategory.groceries, 100)]


@pytest.mark.usefixtures("march")
def test_spending_over_time_zero_fills(tx_repo, user_id):
    points = CategoryService(tx_repo).spending_over_time(user_id, months_back=3, now=date(2024, 4, 1))

    assert [(p.month_start, p.total) for p in points] == [
        (date(2024, 2, 1), 10),
        (date(2024, 3, 1), 150),
        (date(2024, 4, 1), 0),
    ]


@pytest.mark.usefixtures("march")
def test_category_detail_helpers(tx_repo, user_id):
    service = CategoryService(tx_repo)

    assert service.sum_spend_for_category(user_id, ExpenseCategory.coffee) == 60
    assert service.sum_spend_for_category(
        user_id, ExpenseCategory.coffee, date(2024, 3, 1), date(2024, 4, 1)
    ) == 50
    assert [t.date for t in service.transactions_for_category(user_id, ExpenseCategory.coffee)] == [
        date(2024, 3, 20),
        date(2024, 2, 2),
    ]
    assert service.months_with_activity_for_category(
        user_id, ExpenseCategory.coffee, now=date(2024, 4, 1)
    ) == [date(2024, 3, 1), date(2024, 2, 1)]


# =============================================================================
# Filters / quota
# =============================================================================


@pytest.mark.usefixtures("march")
def test_months_with_activity(tx_repo, user_id):
    months = FilterTransactionsService(tx_repo).months_with_activity(user_id)

    assert [(m.month_start, m.count) for m in months] == [(date(2024, 3, 1), 4), (date(2024, 2, 1), 1)]


def test_remaining_free_transactions(transactions_service, tx_repo, user_id):
    for day in (1, 2, 3):
        _spend(transactions_service, user_id, -1, date(2024, 1, day))
    checker = TransactionCheckerService(tx_repo)

    assert checker.monthly_transaction_count(user_id) == 3
    assert checker.remaining_free_transactions(user_id, max_free=5) == 2
    assert checker.remaining_free_transactions(user_id, max_free=2) == 0
