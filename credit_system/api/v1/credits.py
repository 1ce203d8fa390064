"""/v1/credits - credit creation and owner-scoped lookups"""

import time
import uuid
import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from credit_system.api.v1.schemas import MAX_IDENTIFIER, CreditCreate, CreditView, CreditViewList
from credit_system.api.dependencies import get_credit_service, get_request_id
from credit_system.infrastructure.database.session import get_db
from credit_system.services.credit_service import CreditService
from credit_system.domain.exceptions import DomainException, InvariantViolationError, NotFoundError
from credit_system.infrastructure.observability.metrics import (
    credit_lookup_failures_counter,
    record_credit_created,
)
from credit_system.infrastructure.observability.logging import log_credit_created

router = APIRouter()


@router.post("/credits", response_model=str, status_code=status.HTTP_201_CREATED)
def create_credit(
    request_body: CreditCreate,
    request: Request,
    db: Session = Depends(get_db),
    credit_service: CreditService = Depends(get_credit_service),
):
    """
    Create a credit application for an existing customer.

    Flow:
    1. Validate value, first installment date and installment count
    2. Resolve the owning customer
    3. Persist the credit with a freshly generated credit code
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        credit = credit_service.save(request_body.to_domain())
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Credit rejected: {e}", extra={"request_id": request_id})
        raise

    duration_ms = (time.time() - start_time) * 1000
    record_credit_created(credit.number_of_installments)
    log_credit_created(
        request_id,
        credit.customer_id,
        str(credit.credit_code),
        credit.number_of_installments,
        duration_ms,
    )

    return f"Credit {credit.credit_code} - Customer {credit.customer.email} saved!"


@router.get("/credits", response_model=List[CreditViewList])
def list_credits(
    customer_id: int = Query(..., ge=1, le=MAX_IDENTIFIER, description="Customer identifier"),
    credit_service: CreditService = Depends(get_credit_service),
):
    """List a customer's credits; unknown customers get an empty list"""
    return [CreditViewList.from_domain(c) for c in credit_service.find_all_by_customer(customer_id)]


@router.get("/credits/{credit_code}", response_model=CreditView)
def get_credit(
    credit_code: uuid.UUID,
    request: Request,
    customer_id: int = Query(..., ge=1, le=MAX_IDENTIFIER, description="Customer identifier"),
    credit_service: CreditService = Depends(get_credit_service),
):
    """Retrieve a credit by code, only on behalf of its owner"""
    request_id = get_request_id(request)

    try:
        credit = credit_service.find_by_credit_code(customer_id, credit_code)
    except NotFoundError as e:
        credit_lookup_failures_counter.labels(reason="not_found").inc()
        logging.warning(f"Credit lookup failed: {e}", extra={"request_id": request_id})
        raise
    except InvariantViolationError:
        credit_lookup_failures_counter.labels(reason="ownership_mismatch").inc()
        logging.error(
            "Credit requested by a customer other than its owner",
            extra={"request_id": request_id, "customer_id": customer_id, "credit_code": str(credit_code)},
        )
        raise

    return CreditView.from_domain(credit)
