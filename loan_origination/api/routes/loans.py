"""/loans - loan booking lifecycle"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loan_origination.api.schemas import (
    LoanCreateRequest,
    LoanStatusUpdateRequest,
    LoanDetails,
    RepaymentDetails,
    LoanResponse,
    LoanEnvelope,
    MessageResponse,
)
from loan_origination.api.dependencies import get_request_id, parse_id
from loan_origination.api.routes.users import to_user_response
from loan_origination.infrastructure.database.session import get_db
from loan_origination.infrastructure.database.repositories import UserRepository, LoanRepository
from loan_origination.infrastructure.database.models import LoanBooking
from loan_origination.infrastructure.observability.metrics import record_loan_booking, record_status_update
from loan_origination.infrastructure.observability.logging import log_loan_event
from loan_origination.domain.repayment import calculate_repayment_terms
from loan_origination.domain.exceptions import (
    UserNotFoundError,
    LoanNotFoundError,
    InvalidTenureError,
    LoanValidationError,
)

router = APIRouter()


def to_loan_response(loan: LoanBooking) -> LoanResponse:
    return LoanResponse(
        id=str(loan.id),
        borrower_id=str(loan.borrower_id),
        borrower=to_user_response(loan.borrower) if loan.borrower else None,
        loan_details=LoanDetails(
            loan_type=loan.loan_type,
            loan_amount=loan.loan_amount,
            interest_rate=loan.interest_rate,
            tenure=loan.tenure,
            loan_status=loan.loan_status,
            disbursal_date=loan.disbursal_date,
        ),
        repayment_details=RepaymentDetails(
            emi_amount=loan.emi_amount,
            total_outstanding=loan.total_outstanding,
        ),
        created_at=loan.created_at,
        updated_at=loan.updated_at,
    )


@router.post("/create", status_code=201, response_model=LoanEnvelope)
def create_loan(
    request_body: LoanCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Book a new loan for an existing user.

    Flow:
    1. Resolve the borrower
    2. Reject non-positive tenure
    3. Derive EMI (flat split, interest ignored) and outstanding
    4. Persist in Pending status
    """
    request_id = get_request_id(request)

    try:
        borrower_uuid = parse_id(request_body.borrower_id)
        borrower = UserRepository(db).get_user_by_id(borrower_uuid) if borrower_uuid else None
        if not borrower:
            raise UserNotFoundError("User not found")

        terms = calculate_repayment_terms(request_body.loan_amount, request_body.tenure)

        db_loan = LoanRepository(db).create_loan(
            borrower_id=borrower.id,
            loan_type=request_body.loan_type.value,
            loan_amount=request_body.loan_amount,
            interest_rate=request_body.interest_rate,
            tenure=request_body.tenure,
            terms=terms,
        )
        db.commit()

    except UserNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidTenureError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except LoanValidationError as e:
        db.rollback()
        logging.warning(f"Loan validation error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail="Validation error")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Server error")

    record_loan_booking(db_loan.loan_type, db_loan.loan_amount)
    log_loan_event(
        request_id,
        str(db_loan.id),
        "loan_created",
        borrower_id=str(db_loan.borrower_id),
        loan_type=db_loan.loan_type,
        loan_amount=db_loan.loan_amount,
        emi_amount=db_loan.emi_amount,
    )

    return LoanEnvelope(message="Loan booking created successfully", loan=to_loan_response(db_loan))


@router.get("", response_model=List[LoanResponse])
def list_loans(request: Request, db: Session = Depends(get_db)):
    """All loan bookings with borrower details"""
    try:
        loans = LoanRepository(db).list_loans()
        return [to_loan_response(loan) for loan in loans]
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/{loan_id}", response_model=LoanResponse)
def get_loan(loan_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        loan_uuid = parse_id(loan_id)
        loan = LoanRepository(db).get_loan_by_id(loan_uuid) if loan_uuid else None
        if not loan:
            raise LoanNotFoundError("Loan not found")
        return to_loan_response(loan)

    except LoanNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/{loan_id}/update", response_model=LoanEnvelope)
def update_loan_status(
    loan_id: str,
    request_body: LoanStatusUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Set the loan status.

    The value is stored as given, without checking it against LoanStatus.
    EMI and outstanding are left as booked.
    """
    request_id = get_request_id(request)
    loan_repo = LoanRepository(db)

    try:
        loan_uuid = parse_id(loan_id)
        loan = loan_repo.get_loan_by_id(loan_uuid) if loan_uuid else None
        if not loan:
            raise LoanNotFoundError("Loan not found")

        loan_repo.update_status(loan, request_body.loan_status)
        db.commit()

    except LoanNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Server error")

    record_status_update(request_body.loan_status)
    log_loan_event(request_id, loan_id, "status_updated", loan_status=request_body.loan_status)

    return LoanEnvelope(message="Loan status updated", loan=to_loan_response(loan))


@router.delete("/{loan_id}/delete", response_model=MessageResponse)
def delete_loan(loan_id: str, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    loan_repo = LoanRepository(db)

    try:
        loan_uuid = parse_id(loan_id)
        loan = loan_repo.get_loan_by_id(loan_uuid) if loan_uuid else None
        if not loan:
            raise LoanNotFoundError("Loan not found")

        loan_repo.delete_loan(loan)
        db.commit()

    except LoanNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Server error")

    log_loan_event(request_id, loan_id, "loan_deleted")

    return MessageResponse(message="Loan booking deleted successfully")
