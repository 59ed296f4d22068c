"""Repayment figures for new loan bookings"""

from loan_origination.domain.models import RepaymentTerms
from loan_origination.domain.exceptions import InvalidTenureError


def calculate_repayment_terms(loan_amount: float, tenure: float) -> RepaymentTerms:
    """
    Derive the repayment snapshot stored with a new loan booking.

    EMI is a flat split of the principal over the tenure; the interest rate
    is recorded on the booking but does not enter the calculation. Figures
    are never recomputed after the booking is created.

    Raises:
        InvalidTenureError: If tenure is zero or negative

    Example:
        50000 over 24 periods -> emi 2083.33.., outstanding 50000
    """
    if tenure <= 0:
        raise InvalidTenureError("Tenure must be greater than zero")

    return RepaymentTerms(
        emi_amount=loan_amount / tenure,
        total_outstanding=loan_amount,
    )
