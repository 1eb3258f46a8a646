# pylint: disable=redefined-outer-name

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ghostbill.api.deps import get_session_factory
from ghostbill.core.categorizer_service import CategorizerService
from ghostbill.core.profiles_service import ProfilesService
from ghostbill.core.recurring_transactions_service import RecurringTransactionsService
from ghostbill.core.transactions_service import TransactionsService
from ghostbill.domain.schemas.database import Base, init_db
from ghostbill.infrastructure.persistence.merchant_override_repository import MerchantOverrideRepository
from ghostbill.infrastructure.persistence.profile_repository import ProfileRepository
from ghostbill.infrastructure.persistence.recurring_transaction_repository import RecurringTransactionRepository
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository
from ghostbill.main import app


@pytest.fixture
def session_factory():
    """A fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def tx_repo(session_factory):
    return TransactionRepository(session_factory)


@pytest.fixture
def recurring_repo(session_factory):
    return RecurringTransactionRepository(session_factory)


@pytest.fixture
def profiles_service(session_factory):
    return ProfilesService(ProfileRepository(session_factory))


@pytest.fixture
def categorizer_service(session_factory):
    return CategorizerService(MerchantOverrideRepository(session_factory))


@pytest.fixture
def transactions_service(tx_repo, profiles_service, categorizer_service):
    return TransactionsService(tx_repo, profiles_service, categorizer_service)


@pytest.fixture
def recurring_service(recurring_repo, tx_repo, profiles_service):
    return RecurringTransactionsService(recurring_repo, tx_repo, profiles_service)


@pytest.fixture
def client(session_factory, user_id):
    """TestClient bound to the in-memory database, without startup hooks."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    test_client = TestClient(app, headers={"X-User-Id": str(user_id)})
    yield test_client
    app.dependency_overrides.clear()
