"""
Repository protocols consumed by the service layer.

Services depend on these contracts rather than on SQLAlchemy, so they can be
exercised against mocks or any other store.
"""

import uuid
from typing import List, Optional, Protocol

from credit_system.domain.models import Credit, Customer


class CustomerRepositoryProtocol(Protocol):
    """Keyed storage of customer records"""

    def save(self, customer: Customer) -> Customer:
        """Persist a new customer and return it with its id assigned"""
        ...

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        ...

    def update(self, customer: Customer) -> Customer:
        """Overwrite the mutable fields of an existing customer"""
        ...

    def delete_by_id(self, customer_id: int) -> None:
        ...


class CreditRepositoryProtocol(Protocol):
    """Keyed storage of credit records"""

    def save(self, credit: Credit) -> Credit:
        """Persist a credit, assigning id and credit code if absent"""
        ...

    def find_all_by_customer_id(self, customer_id: int) -> List[Credit]:
        ...

    def find_by_credit_code(self, credit_code: uuid.UUID) -> Optional[Credit]:
        ...
