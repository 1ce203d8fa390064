"""/v1/customers - customer registration and profile endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from credit_system.api.v1.schemas import MAX_IDENTIFIER, CustomerCreate, CustomerUpdateRequest, CustomerView
from credit_system.api.dependencies import get_customer_service, get_request_id
from credit_system.infrastructure.database.session import get_db
from credit_system.services.customer_service import CustomerService
from credit_system.domain.exceptions import DomainException, NotFoundError
from credit_system.infrastructure.observability.metrics import customer_created_counter

router = APIRouter()


@router.post("/customers", response_model=str, status_code=status.HTTP_201_CREATED)
def create_customer(
    request_body: CustomerCreate,
    request: Request,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """Register a new customer"""
    request_id = get_request_id(request)

    try:
        customer = customer_service.save(request_body.to_domain())
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Customer rejected: {e}", extra={"request_id": request_id})
        raise
    except IntegrityError:
        db.rollback()
        logging.warning("Duplicate customer registration", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Customer with this CPF or email already exists")

    customer_created_counter.inc()
    logging.info("Customer created", extra={"request_id": request_id, "customer_id": customer.id})
    return f"Customer {customer.email} saved!"


@router.get("/customers/{customer_id}", response_model=CustomerView)
def get_customer(
    request: Request,
    customer_id: int = Path(..., ge=1, le=MAX_IDENTIFIER),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """Retrieve a customer's profile"""
    try:
        customer = customer_service.find_by_id(customer_id)
    except NotFoundError as e:
        logging.warning(f"Customer lookup failed: {e}", extra={"request_id": get_request_id(request)})
        raise

    return CustomerView.from_domain(customer)


@router.patch("/customers", response_model=CustomerView)
def update_customer(
    request_body: CustomerUpdateRequest,
    request: Request,
    customer_id: int = Query(..., ge=1, le=MAX_IDENTIFIER, description="Customer identifier"),
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """Update name, income and address of an existing customer"""
    try:
        customer = customer_service.update(customer_id, request_body.to_domain())
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Customer update rejected: {e}", extra={"request_id": get_request_id(request)})
        raise

    return CustomerView.from_domain(customer)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    request: Request,
    customer_id: int = Path(..., ge=1, le=MAX_IDENTIFIER),
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """Remove a customer and all of its credits"""
    try:
        customer_service.delete(customer_id)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Customer delete failed: {e}", extra={"request_id": get_request_id(request)})
        raise

    return Response(status_code=status.HTTP_204_NO_CONTENT)
