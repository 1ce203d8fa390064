"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class CreditStatus(str, Enum):
    """Lifecycle status of a credit application"""

    IN_PROGRESS = "IN_PROGRESS"
    APPROVED = "APPROVED"
    REJECT = "REJECT"


@dataclass(frozen=True)
class Address:
    """Customer address, owned by exactly one customer"""

    zip_code: str
    street: str


@dataclass(frozen=True)
class Customer:
    """Customer with income and address"""

    first_name: str
    last_name: str
    cpf: str
    income: Decimal
    email: str
    password: str  # bcrypt hash once persisted
    address: Address
    id: Optional[int] = None


@dataclass(frozen=True)
class CustomerUpdate:
    """Fields a customer may change after registration"""

    first_name: str
    last_name: str
    income: Decimal
    zip_code: str
    street: str


@dataclass(frozen=True)
class Credit:
    """Credit application owned by a customer.

    The owner is referenced by ``customer_id``; ``customer`` is only set once
    the reference has been resolved.
    """

    credit_value: Decimal
    day_first_installment: date
    number_of_installments: int
    customer_id: int
    credit_code: Optional[uuid.UUID] = None
    status: CreditStatus = CreditStatus.IN_PROGRESS
    id: Optional[int] = None
    customer: Optional[Customer] = field(default=None, compare=False, repr=False)
