"""Pydantic schemas for API request/response bodies.

Request schemas only describe wire types. Field rules are applied by
``credit_system.domain.validation`` when a request is converted with
``to_domain``, so a missing field is reported with its domain message rather
than a generic type error.
"""

import uuid
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional

from credit_system.domain.models import Address, Credit, Customer, CustomerUpdate
from credit_system.domain.validation import validate_credit, validate_customer, validate_customer_update

# Largest value a BIGINT identifier column can hold
MAX_IDENTIFIER = 9_223_372_036_854_775_807


class CustomerCreate(BaseModel):
    """Request body for POST /v1/customers"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    cpf: Optional[str] = Field(None, description="CPF, formatted or digits only")
    income: Optional[Decimal] = None
    email: Optional[str] = None
    password: Optional[str] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None

    def to_domain(self) -> Customer:
        return validate_customer(
            Customer(
                first_name=self.first_name,
                last_name=self.last_name,
                cpf=self.cpf,
                income=self.income,
                email=self.email,
                password=self.password,
                address=Address(zip_code=self.zip_code, street=self.street),
            )
        )


class CustomerUpdateRequest(BaseModel):
    """Request body for PATCH /v1/customers"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    income: Optional[Decimal] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None

    def to_domain(self) -> CustomerUpdate:
        return validate_customer_update(
            CustomerUpdate(
                first_name=self.first_name,
                last_name=self.last_name,
                income=self.income,
                zip_code=self.zip_code,
                street=self.street,
            )
        )


class CustomerView(BaseModel):
    """Customer as returned by the API (no password)"""

    id: int
    first_name: str
    last_name: str
    cpf: str
    income: Decimal
    email: str
    zip_code: str
    street: str

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerView":
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            cpf=customer.cpf,
            income=customer.income,
            email=customer.email,
            zip_code=customer.address.zip_code,
            street=customer.address.street,
        )


class CreditCreate(BaseModel):
    """Request body for POST /v1/credits"""

    credit_value: Optional[Decimal] = None
    day_first_installment: Optional[date] = None
    number_of_installments: Optional[int] = None
    customer_id: Optional[int] = Field(None, ge=1, le=MAX_IDENTIFIER)

    def to_domain(self) -> Credit:
        return validate_credit(
            Credit(
                credit_value=self.credit_value,
                day_first_installment=self.day_first_installment,
                number_of_installments=self.number_of_installments,
                customer_id=self.customer_id,
            )
        )


class CreditViewList(BaseModel):
    """Summary row in GET /v1/credits"""

    credit_code: uuid.UUID
    credit_value: Decimal
    number_of_installments: int

    @classmethod
    def from_domain(cls, credit: Credit) -> "CreditViewList":
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installments=credit.number_of_installments,
        )


class CreditView(BaseModel):
    """Response for GET /v1/credits/{credit_code}"""

    credit_code: uuid.UUID
    credit_value: Decimal
    number_of_installments: int
    status: str
    email_customer: Optional[str] = None
    income_customer: Optional[Decimal] = None

    @classmethod
    def from_domain(cls, credit: Credit) -> "CreditView":
        customer = credit.customer
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installments=credit.number_of_installments,
            status=credit.status.value,
            email_customer=customer.email if customer else None,
            income_customer=customer.income if customer else None,
        )


class ExceptionDetails(BaseModel):
    """Error body shared by all domain error responses"""

    title: str
    timestamp: datetime
    status: int
    exception: str
    details: Dict[str, str]
