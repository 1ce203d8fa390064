"""Data access layer for customers and credits"""

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from credit_system.infrastructure.database.models import CustomerRecord, CreditRecord
from credit_system.domain.models import Address, Credit, CreditStatus, Customer


def customer_to_domain(record: CustomerRecord) -> Customer:
    return Customer(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        cpf=record.cpf,
        income=record.income,
        email=record.email,
        password=record.password,
        address=Address(zip_code=record.zip_code, street=record.street),
    )


def credit_to_domain(record: CreditRecord, customer: Optional[Customer] = None) -> Credit:
    return Credit(
        id=record.id,
        credit_code=record.credit_code,
        credit_value=record.credit_value,
        day_first_installment=record.day_first_installment,
        number_of_installments=record.number_of_installments,
        status=CreditStatus(record.status),
        customer_id=record.customer_id,
        customer=customer,
    )


class CustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, customer: Customer) -> Customer:
        """Persist a new customer"""
        db_customer = CustomerRecord(
            first_name=customer.first_name,
            last_name=customer.last_name,
            cpf=customer.cpf,
            email=customer.email,
            income=customer.income,
            password=customer.password,
            zip_code=customer.address.zip_code,
            street=customer.address.street,
        )
        self.db.add(db_customer)
        self.db.flush()  # Get ID without committing
        return customer_to_domain(db_customer)

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        db_customer = self.db.get(CustomerRecord, customer_id)
        return customer_to_domain(db_customer) if db_customer else None

    def update(self, customer: Customer) -> Customer:
        """Write profile fields back; id, CPF, email and password never change"""
        db_customer = self.db.get(CustomerRecord, customer.id)
        db_customer.first_name = customer.first_name
        db_customer.last_name = customer.last_name
        db_customer.income = customer.income
        db_customer.zip_code = customer.address.zip_code
        db_customer.street = customer.address.street
        self.db.flush()
        return customer_to_domain(db_customer)

    def delete_by_id(self, customer_id: int) -> None:
        db_customer = self.db.get(CustomerRecord, customer_id)
        if db_customer is not None:
            self.db.delete(db_customer)
            self.db.flush()


class CreditRepository:
    """Repository for credits"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, credit: Credit) -> Credit:
        """Persist credit, generating a credit code when absent"""
        db_credit = CreditRecord(
            credit_code=credit.credit_code or uuid.uuid4(),
            credit_value=credit.credit_value,
            day_first_installment=credit.day_first_installment,
            number_of_installments=credit.number_of_installments,
            status=credit.status.value,
            customer_id=credit.customer_id,
        )
        self.db.add(db_credit)
        self.db.flush()
        return credit_to_domain(db_credit, customer=credit.customer)

    def find_all_by_customer_id(self, customer_id: int) -> List[Credit]:
        """Fetch a customer's credits in insertion order"""
        records = (
            self.db.query(CreditRecord)
            .filter(CreditRecord.customer_id == customer_id)
            .order_by(CreditRecord.id)
            .all()
        )
        return [credit_to_domain(r) for r in records]

    def find_by_credit_code(self, credit_code: uuid.UUID) -> Optional[Credit]:
        """Fetch credit with its owner resolved"""
        db_credit = (
            self.db.query(CreditRecord)
            .filter(CreditRecord.credit_code == credit_code)
            .first()
        )
        if not db_credit:
            return None
        return credit_to_domain(db_credit, customer=customer_to_domain(db_credit.customer))
