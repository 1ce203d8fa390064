"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_system.api.main import create_app
from credit_system.infrastructure.database.models import Base
from credit_system.infrastructure.database.session import get_db
from credit_system.domain.models import Address, Credit, Customer


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def build_customer(
    first_name: str = "Cami",
    last_name: str = "Cavalcante",
    cpf: str = "529.982.247-25",
    email: str = "camila@email.com",
    income: Decimal = Decimal("1000.0"),
    password: str = "1234",
    zip_code: str = "000000",
    street: str = "Rua da Cami, 123",
    id: int | None = 1,
) -> Customer:
    return Customer(
        id=id,
        first_name=first_name,
        last_name=last_name,
        cpf=cpf,
        email=email,
        income=income,
        password=password,
        address=Address(zip_code=zip_code, street=street),
    )


def build_credit(
    credit_value: Decimal = Decimal("100.0"),
    day_first_installment: date | None = None,
    number_of_installments: int = 15,
    customer_id: int = 1,
    **kwargs,
) -> Credit:
    return Credit(
        credit_value=credit_value,
        day_first_installment=day_first_installment or date.today() + timedelta(days=60),
        number_of_installments=number_of_installments,
        customer_id=customer_id,
        **kwargs,
    )


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Keep bcrypt cheap in tests"""
    from credit_system.config import settings

    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest.fixture
def make_customer():
    """Factory for customers with overridable fields"""
    return build_customer


@pytest.fixture
def make_credit():
    """Factory for credits due two months from today"""
    return build_credit
