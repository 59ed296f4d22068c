"""Domain models - pure Python dataclasses and enums representing business entities"""

from dataclasses import dataclass
from enum import Enum


class LoanType(str, Enum):
    """Loan products offered"""

    PERSONAL = "Personal Loan"
    HOME = "Home Loan"
    CAR = "Car Loan"
    EDUCATION = "Education Loan"
    BUSINESS = "Business Loan"


class LoanStatus(str, Enum):
    """Known loan lifecycle states: Pending -> Approved -> Disbursed -> Closed, or Rejected"""

    PENDING = "Pending"
    APPROVED = "Approved"
    DISBURSED = "Disbursed"
    CLOSED = "Closed"
    REJECTED = "Rejected"


@dataclass
class RepaymentTerms:
    """Repayment snapshot computed once when a loan is booked"""

    emi_amount: float
    total_outstanding: float


@dataclass
class CreditScore:
    """Generated credit score with its category"""

    score: int
    category: str
    message: str
