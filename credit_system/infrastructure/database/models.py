"""SQLAlchemy ORM models for customers and credits"""

from sqlalchemy import BigInteger, Column, Date, DateTime, ForeignKey, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
from credit_system.domain.models import CreditStatus

Base = declarative_base()

# SQLite only autoincrements INTEGER primary keys
Identifier = BigInteger().with_variant(Integer, "sqlite")


class CustomerRecord(Base):
    """Registered customer; the address is stored inline"""

    __tablename__ = "customer"

    id = Column(Identifier, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    cpf = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    income = Column(Numeric(14, 2), nullable=False)
    password = Column(Text, nullable=False)
    zip_code = Column(Text, nullable=False)
    street = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    credits = relationship(
        "CreditRecord",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CreditRecord.id",
    )


class CreditRecord(Base):
    """Credit application with its installment schedule"""

    __tablename__ = "credit"

    id = Column(Identifier, primary_key=True, autoincrement=True)
    credit_code = Column(Uuid, nullable=False, unique=True)
    credit_value = Column(Numeric(14, 2), nullable=False)
    day_first_installment = Column(Date, nullable=False)
    number_of_installments = Column(Integer, nullable=False)
    status = Column(Text, nullable=False, default=CreditStatus.IN_PROGRESS.value)
    customer_id = Column(Identifier, ForeignKey("customer.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerRecord", back_populates="credits")
