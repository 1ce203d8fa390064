"""Credit creation and owner-scoped credit lookups"""

import uuid
from dataclasses import replace
from typing import List

from credit_system.domain.exceptions import InvariantViolationError, NotFoundError
from credit_system.domain.models import Credit
from credit_system.services.customer_service import CustomerService
from credit_system.services.protocols import CreditRepositoryProtocol


class CreditService:
    """
    Business operations over credits.

    Collaborator errors propagate unchanged; the service only raises for
    conditions it detects itself (unknown credit code, owner mismatch).
    """

    def __init__(self, credit_repository: CreditRepositoryProtocol, customer_service: CustomerService):
        self.credit_repository = credit_repository
        self.customer_service = customer_service

    def save(self, credit: Credit) -> Credit:
        """
        Resolve the owning customer and persist the credit.

        Raises:
            NotFoundError: If the customer does not exist (nothing is persisted)
        """
        customer = self.customer_service.find_by_id(credit.customer_id)
        return self.credit_repository.save(replace(credit, customer=customer))

    def find_all_by_customer(self, customer_id: int) -> List[Credit]:
        """Credits of a customer in storage order; empty for unknown customers"""
        return self.credit_repository.find_all_by_customer_id(customer_id)

    def find_by_credit_code(self, customer_id: int, credit_code: uuid.UUID) -> Credit:
        """
        Fetch a credit by its code on behalf of ``customer_id``.

        Raises:
            NotFoundError: No credit has this code
            InvariantViolationError: The credit belongs to another customer
        """
        credit = self.credit_repository.find_by_credit_code(credit_code)
        if credit is None:
            raise NotFoundError(f"Creditcode {credit_code} not found")
        if credit.customer_id != customer_id:
            raise InvariantViolationError("Contact admin")
        return credit
