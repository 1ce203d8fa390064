"""Field validation for customers and credits.

Each ``validate_*`` function collects every failing field before raising, so
a caller sees all problems with a request at once. The raised
``DomainValidationError`` carries them as ``errors``, a field -> message map.
"""

import re
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from credit_system.domain.exceptions import DomainValidationError
from credit_system.domain.models import Credit, Customer, CustomerUpdate

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
CPF_FORMATTED_PATTERN = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
CPF_DIGITS_PATTERN = re.compile(r"^\d{11}$")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _cpf_check_digit(digits: str) -> int:
    """Mod-11 check digit over the given prefix (weights count down to 2)"""
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(cpf: Optional[str]) -> bool:
    """
    Check a Brazilian CPF number.

    Accepts either ``529.982.247-25`` or ``52998224725``. Sequences of a
    single repeated digit pass the checksum but are rejected.
    """
    if cpf is None:
        return False
    if CPF_FORMATTED_PATTERN.match(cpf):
        digits = cpf.replace(".", "").replace("-", "")
    elif CPF_DIGITS_PATTERN.match(cpf):
        digits = cpf
    else:
        return False

    if len(set(digits)) == 1:
        return False

    first = _cpf_check_digit(digits[:9])
    second = _cpf_check_digit(digits[:9] + str(first))
    return digits[9:] == f"{first}{second}"


def normalize_cpf(cpf: str) -> str:
    """Return a valid CPF in its formatted spelling, e.g. ``529.982.247-25``"""
    digits = cpf.replace(".", "").replace("-", "")
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def is_valid_email(email: Optional[str]) -> bool:
    return email is not None and EMAIL_PATTERN.match(email) is not None


def _raise_if_any(errors: Dict[str, str]) -> None:
    if errors:
        raise DomainValidationError(errors)


def validate_credit(credit: Credit, today: Optional[date] = None) -> Credit:
    """
    Validate a credit request before it reaches the credit service.

    Args:
        credit: Unsaved credit with value, schedule and owner populated
        today: Reference date for the future-installment rule (default: today)

    Returns:
        The same credit, for chaining

    Raises:
        DomainValidationError: With one message per failing field
    """
    today = today or date.today()
    errors: Dict[str, str] = {}

    if credit.credit_value is None:
        errors["credit_value"] = "The value of the credit cannot be null"
    elif credit.credit_value <= Decimal("0"):
        errors["credit_value"] = "The value of the credit must be positive"

    if credit.day_first_installment is None or credit.day_first_installment <= today:
        errors["day_first_installment"] = "The first of installment cannot be in the past"

    if credit.number_of_installments is None or credit.number_of_installments <= 0:
        errors["number_of_installments"] = "The number of installments must be positive"

    if credit.customer_id is None:
        errors["customer_id"] = "The customer cannot be null"

    _raise_if_any(errors)
    return credit


def validate_customer(customer: Customer) -> Customer:
    """Validate a new customer registration, returning it with a formatted CPF"""
    errors: Dict[str, str] = {}

    if _is_blank(customer.first_name):
        errors["first_name"] = "First name is required"
    if _is_blank(customer.last_name):
        errors["last_name"] = "Last name is required"
    if not is_valid_cpf(customer.cpf):
        errors["cpf"] = "CPF is invalid"

    if customer.income is None:
        errors["income"] = "Income is required"
    elif customer.income < Decimal("0"):
        errors["income"] = "Income cannot be negative"

    if _is_blank(customer.email):
        errors["email"] = "Email is required"
    elif not is_valid_email(customer.email):
        errors["email"] = "Email is invalid"

    if _is_blank(customer.password):
        errors["password"] = "Password is required"

    address = customer.address
    if address is None or _is_blank(address.zip_code):
        errors["zip_code"] = "Zipcode is required"
    if address is None or _is_blank(address.street):
        errors["street"] = "Street is required"

    _raise_if_any(errors)
    return replace(customer, cpf=normalize_cpf(customer.cpf))


def validate_customer_update(update: CustomerUpdate) -> CustomerUpdate:
    """Validate a partial customer profile update"""
    errors: Dict[str, str] = {}

    if _is_blank(update.first_name):
        errors["first_name"] = "First name cannot be empty"
    if _is_blank(update.last_name):
        errors["last_name"] = "Last name cannot be empty"

    if update.income is None:
        errors["income"] = "Income cannot be empty"
    elif update.income < Decimal("0"):
        errors["income"] = "Income cannot be negative"

    if _is_blank(update.zip_code):
        errors["zip_code"] = "Zip code cannot be empty"
    if _is_blank(update.street):
        errors["street"] = "Street cannot be empty"

    _raise_if_any(errors)
    return update
