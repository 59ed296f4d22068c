"""SQLAlchemy ORM models for users and loan bookings"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from loan_origination.domain.models import LoanStatus

Base = declarative_base()


class User(Base):
    """Registered borrower with identity and financial profile"""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    aadhar_num = Column(BigInteger, nullable=False, unique=True)
    mobile_num = Column(BigInteger, nullable=False, unique=True)
    pan_num = Column(String(20), nullable=False, unique=True)
    address = Column(Text, nullable=False)
    password = Column(String(60), nullable=True)  # bcrypt hash
    gender = Column(Text, nullable=False)
    salary = Column(Float, nullable=False)
    is_kyc = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Back-reference only: deleting a user never touches its loan bookings
    loan_bookings = relationship("LoanBooking", back_populates="borrower", passive_deletes="all")


class LoanBooking(Base):
    """Loan application with its repayment snapshot"""

    __tablename__ = "loan_bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    borrower_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Loan details
    loan_type = Column(Text, nullable=False)
    loan_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=True)
    tenure = Column(Float, nullable=False)
    loan_status = Column(Text, nullable=False, default=LoanStatus.PENDING.value)
    disbursal_date = Column(DateTime(timezone=True), nullable=True)

    # Repayment details, fixed at creation
    emi_amount = Column(Float, nullable=False)
    total_outstanding = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    borrower = relationship("User", back_populates="loan_bookings")
