"""/register - user registration and account management"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loan_origination.api.schemas import (
    RegisterRequest,
    RegisterResponse,
    UserUpdate,
    UserResponse,
    StatusMessage,
    MessageResponse,
)
from loan_origination.api.dependencies import get_request_id, apply_response_delay, parse_id
from loan_origination.infrastructure.database.session import get_db
from loan_origination.infrastructure.database.repositories import UserRepository
from loan_origination.infrastructure.database.models import User
from loan_origination.infrastructure.observability.metrics import registration_counter
from loan_origination.infrastructure.observability.logging import log_user_registered
from loan_origination.domain.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    BorrowerHasLoansError,
)
from loan_origination.utils.passwords import hash_password

router = APIRouter(dependencies=[Depends(apply_response_delay)])


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        aadhar_num=user.aadhar_num,
        mobile_num=user.mobile_num,
        pan_num=user.pan_num,
        address=user.address,
        gender=user.gender,
        salary=user.salary,
        is_kyc=user.is_kyc,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("", status_code=201, response_model=RegisterResponse)
def register_user(
    request_body: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Register a new user.

    Flow:
    1. Reject if email, aadhar, mobile or PAN number is already taken
    2. Hash the password with a fresh bcrypt salt
    3. Persist; a unique constraint hit at insert time is the same conflict
    """
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    try:
        existing = user_repo.find_conflicting_user(
            email=request_body.email,
            aadhar_num=request_body.aadhar_num,
            mobile_num=request_body.mobile_num,
            pan_num=request_body.pan_num,
        )
        if existing:
            raise UserAlreadyExistsError("User already exists")

        db_user = user_repo.create_user(
            name=request_body.name,
            email=request_body.email,
            aadhar_num=request_body.aadhar_num,
            mobile_num=request_body.mobile_num,
            pan_num=request_body.pan_num,
            address=request_body.address,
            password=hash_password(request_body.password),
            gender=request_body.gender,
            salary=request_body.salary,
            is_kyc=request_body.is_kyc,
        )
        db.commit()

    except UserAlreadyExistsError as e:
        db.rollback()
        registration_counter.labels(outcome="conflict").inc()
        logging.warning(f"Registration conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=406, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Registration failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail="Registration failed")

    user_id = str(db_user.id)
    registration_counter.labels(outcome="created").inc()
    log_user_registered(request_id, user_id)

    return RegisterResponse(message="User Successfully Registered", id=user_id)


@router.get("/users", response_model=List[UserResponse])
def list_users(request: Request, db: Session = Depends(get_db)):
    """Return every registered user"""
    try:
        users = UserRepository(db).list_users()
        return [to_user_response(u) for u in users]
    except Exception as e:
        logging.error(f"Listing users failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=400, detail="Error fetching users")


@router.get("/user/{user_id}", response_model=UserResponse)
def get_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        user_uuid = parse_id(user_id)
        user = UserRepository(db).get_user_by_id(user_uuid) if user_uuid else None
        if not user:
            raise UserNotFoundError("User not found")
        return to_user_response(user)

    except UserNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        logging.error(f"Fetching user failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=400, detail="Error fetching user")


@router.patch("/user/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: str,
    request_body: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Merge the supplied fields into the user record.

    Only fields declared on UserUpdate are accepted; a new password is
    re-hashed before storing.
    """
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    try:
        user_uuid = parse_id(user_id)
        user = user_repo.get_user_by_id(user_uuid) if user_uuid else None
        if not user:
            raise UserNotFoundError("User not found")

        changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        user_repo.update_user(user, changes)
        db.commit()

    except UserNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except UserAlreadyExistsError as e:
        db.rollback()
        logging.warning(f"Update conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=406, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Updating user failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail="Error updating account")

    return MessageResponse(message="Account got updated")


@router.delete("/user/{user_id}", response_model=StatusMessage)
def delete_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    """Delete a user; refused while any loan booking names them as borrower"""
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    try:
        user_uuid = parse_id(user_id)
        user = user_repo.get_user_by_id(user_uuid) if user_uuid else None
        if not user:
            raise UserNotFoundError("This user id doesn't exist")

        user_repo.delete_user(user)
        db.commit()

    except UserNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except BorrowerHasLoansError as e:
        db.rollback()
        logging.warning(f"Delete refused: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Deleting user failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail="Error deleting account")

    return StatusMessage(success=True, message="Account deleted")
