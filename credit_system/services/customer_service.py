"""Customer registration, lookup, update and removal"""

from dataclasses import replace

from credit_system.domain.customers import apply_customer_update
from credit_system.domain.exceptions import NotFoundError
from credit_system.domain.models import Customer, CustomerUpdate
from credit_system.services.protocols import CustomerRepositoryProtocol
from credit_system.utils.passwords import hash_password


class CustomerService:
    """Business operations over customers.

    ``find_by_id`` is the lookup contract other services rely on: it either
    returns a customer or raises NotFoundError.
    """

    def __init__(self, customer_repository: CustomerRepositoryProtocol):
        self.customer_repository = customer_repository

    def save(self, customer: Customer) -> Customer:
        """Persist a new customer, storing only the password hash"""
        return self.customer_repository.save(
            replace(customer, password=hash_password(customer.password))
        )

    def find_by_id(self, customer_id: int) -> Customer:
        customer = self.customer_repository.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError(f"Id {customer_id} not found")
        return customer

    def update(self, customer_id: int, update: CustomerUpdate) -> Customer:
        """Apply a profile update to an existing customer and persist it"""
        customer = self.find_by_id(customer_id)
        return self.customer_repository.update(apply_customer_update(customer, update))

    def delete(self, customer_id: int) -> None:
        """Remove a customer together with its credits"""
        self.find_by_id(customer_id)
        self.customer_repository.delete_by_id(customer_id)
