"""Customer value transformations"""

from dataclasses import replace

from credit_system.domain.models import Address, Customer, CustomerUpdate


def apply_customer_update(customer: Customer, update: CustomerUpdate) -> Customer:
    """Return a copy of ``customer`` with the update applied.

    Identity, CPF, email and password are carried over unchanged.
    """
    return replace(
        customer,
        first_name=update.first_name,
        last_name=update.last_name,
        income=update.income,
        address=Address(zip_code=update.zip_code, street=update.street),
    )
