"""Data access layer for users and loan bookings"""

import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.orm import Session, joinedload
from loan_origination.infrastructure.database.models import User, LoanBooking
from loan_origination.domain.models import LoanStatus, RepaymentTerms
from loan_origination.domain.exceptions import (
    UserAlreadyExistsError,
    BorrowerHasLoansError,
    LoanValidationError,
)


class UserRepository:
    """Repository for registered users"""

    def __init__(self, db: Session):
        self.db = db

    def find_conflicting_user(
        self,
        email: str,
        aadhar_num: int,
        mobile_num: int,
        pan_num: str,
    ) -> Optional[User]:
        """Single lookup across all four unique identity fields"""
        return (
            self.db.query(User)
            .filter(
                or_(
                    User.email == email,
                    User.aadhar_num == aadhar_num,
                    User.mobile_num == mobile_num,
                    User.pan_num == pan_num,
                )
            )
            .first()
        )

    def create_user(self, **fields: Any) -> User:
        """
        Persist a new user.

        The unique constraints are authoritative: a concurrent insert that got
        past the pre-check fails here.

        Raises:
            UserAlreadyExistsError: On unique constraint violation
        """
        db_user = User(**fields)
        self.db.add(db_user)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise UserAlreadyExistsError("User already exists") from e
        return db_user

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()

    def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_aadhar(self, aadhar_num: int) -> Optional[User]:
        return self.db.query(User).filter(User.aadhar_num == aadhar_num).first()

    def update_user(self, db_user: User, changes: Dict[str, Any]) -> User:
        """Apply an already allow-listed set of changes"""
        for field, value in changes.items():
            setattr(db_user, field, value)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise UserAlreadyExistsError("User already exists") from e
        return db_user

    def has_loan_bookings(self, user_id: uuid.UUID) -> bool:
        return (
            self.db.query(LoanBooking.id)
            .filter(LoanBooking.borrower_id == user_id)
            .first()
            is not None
        )

    def delete_user(self, db_user: User) -> None:
        """
        Delete a user that no loan booking refers to.

        Raises:
            BorrowerHasLoansError: If loan bookings still reference the user
        """
        if self.has_loan_bookings(db_user.id):
            raise BorrowerHasLoansError("User has loan bookings")
        self.db.delete(db_user)
        self.db.flush()


class LoanRepository:
    """Repository for loan bookings"""

    def __init__(self, db: Session):
        self.db = db

    def create_loan(
        self,
        borrower_id: uuid.UUID,
        loan_type: str,
        loan_amount: float,
        interest_rate: Optional[float],
        tenure: float,
        terms: RepaymentTerms,
    ) -> LoanBooking:
        """
        Persist a new loan booking in Pending status.

        Raises:
            LoanValidationError: If the store rejects the row
        """
        db_loan = LoanBooking(
            borrower_id=borrower_id,
            loan_type=loan_type,
            loan_amount=loan_amount,
            interest_rate=interest_rate,
            tenure=tenure,
            loan_status=LoanStatus.PENDING.value,
            emi_amount=terms.emi_amount,
            total_outstanding=terms.total_outstanding,
        )
        self.db.add(db_loan)
        try:
            self.db.flush()
        except StatementError as e:
            raise LoanValidationError(str(e.orig or e)) from e
        return db_loan

    def list_loans(self) -> List[LoanBooking]:
        """All bookings with borrower joined in"""
        return (
            self.db.query(LoanBooking)
            .options(joinedload(LoanBooking.borrower))
            .order_by(LoanBooking.created_at)
            .all()
        )

    def get_loan_by_id(self, loan_id: uuid.UUID) -> Optional[LoanBooking]:
        return (
            self.db.query(LoanBooking)
            .options(joinedload(LoanBooking.borrower))
            .filter(LoanBooking.id == loan_id)
            .first()
        )

    def update_status(self, db_loan: LoanBooking, loan_status: str) -> LoanBooking:
        """Overwrite status as given; EMI and outstanding stay untouched"""
        db_loan.loan_status = loan_status
        self.db.flush()
        return db_loan

    def delete_loan(self, db_loan: LoanBooking) -> None:
        self.db.delete(db_loan)
        self.db.flush()
