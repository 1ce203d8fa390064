"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from credit_system.infrastructure.database.session import get_db
from credit_system.infrastructure.database.repositories import CreditRepository, CustomerRepository
from credit_system.services.credit_service import CreditService
from credit_system.services.customer_service import CustomerService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Provide customer service bound to the request's session"""
    return CustomerService(CustomerRepository(db))


def get_credit_service(
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
) -> CreditService:
    """Provide credit service sharing the request's session"""
    return CreditService(CreditRepository(db), customer_service)
