"""POST /login - credential check against the user registry"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loan_origination.api.schemas import LoginRequest, MessageResponse
from loan_origination.api.dependencies import get_request_id, apply_response_delay
from loan_origination.infrastructure.database.session import get_db
from loan_origination.infrastructure.database.repositories import UserRepository
from loan_origination.infrastructure.observability.metrics import login_counter
from loan_origination.infrastructure.observability.logging import log_login_attempt
from loan_origination.domain.exceptions import (
    AuthenticationError,
    UserNotRegisteredError,
    WrongPasswordError,
)
from loan_origination.utils.passwords import verify_password

router = APIRouter()


@router.post("/login", response_model=MessageResponse, dependencies=[Depends(apply_response_delay)])
def login(
    request_body: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Verify an aadhar number / password pair.

    Success only confirms the credentials; no session or token is issued.
    """
    request_id = get_request_id(request)

    try:
        user = UserRepository(db).get_user_by_aadhar(request_body.aadhar_num)
        if not user:
            raise UserNotRegisteredError("User not registered")

        if not verify_password(request_body.password, user.password):
            raise WrongPasswordError("Wrong Password")

    except AuthenticationError as e:
        outcome = "not_registered" if isinstance(e, UserNotRegisteredError) else "wrong_password"
        login_counter.labels(outcome=outcome).inc()
        log_login_attempt(request_id, request_body.aadhar_num, outcome)
        raise HTTPException(status_code=401, detail=str(e))

    except Exception as e:
        logging.error(f"Login failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail="Login failed")

    login_counter.labels(outcome="success").inc()
    log_login_attempt(request_id, request_body.aadhar_num, "success")

    return MessageResponse(message="User logged in successfully")
