"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from loan_origination.domain.models import LoanType

BCRYPT_MAX_PASSWORD_BYTES = 72


def check_password_length(password: Optional[str]) -> Optional[str]:
    """bcrypt only accepts up to 72 bytes of UTF-8, not 72 characters"""
    if password is not None and len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return password


# Users

class RegisterRequest(BaseModel):
    """Request body for POST /register"""

    name: str = Field(..., min_length=2)
    email: EmailStr
    aadhar_num: int = Field(..., gt=0, le=999_999_999_999, description="Aadhar number, up to 12 digits")
    mobile_num: int = Field(..., ge=1_000_000_000, le=9_999_999_999, description="10 digit mobile number")
    pan_num: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    gender: str = Field(..., min_length=1)
    salary: float
    is_kyc: bool = False

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_length(value)


class RegisterResponse(BaseModel):
    """Response for POST /register"""

    message: str
    id: str


class UserUpdate(BaseModel):
    """
    Patch body for PATCH /register/user/{id}.

    Closed set of mutable fields; aadhar and PAN numbers are fixed once
    registered and anything not listed here is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    mobile_num: Optional[int] = Field(None, ge=1_000_000_000, le=9_999_999_999)
    address: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    gender: Optional[str] = Field(None, min_length=1)
    salary: Optional[float] = None
    is_kyc: Optional[bool] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_length(value)


class UserResponse(BaseModel):
    """User record as exposed by the API (password hash never included)"""

    id: str
    name: str
    email: str
    aadhar_num: int
    mobile_num: int
    pan_num: str
    address: str
    gender: str
    salary: float
    is_kyc: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StatusMessage(BaseModel):
    """Outcome flag plus message"""

    success: bool
    message: str


class MessageResponse(BaseModel):
    message: str


# Login

class LoginRequest(BaseModel):
    """Request body for POST /login"""

    aadhar_num: int = Field(..., gt=0)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_length(value)


# Credit score

class CreditScoreResponse(BaseModel):
    """Response for GET /cibil-score"""

    score: int
    category: str
    message: str


# Loan bookings

class LoanCreateRequest(BaseModel):
    """Request body for POST /loans/create"""

    model_config = ConfigDict(allow_inf_nan=False)

    borrower_id: str = Field(..., min_length=1)
    loan_type: LoanType
    loan_amount: float
    interest_rate: Optional[float] = None
    tenure: float


class LoanStatusUpdateRequest(BaseModel):
    """Request body for PUT /loans/{id}/update; any status string is stored verbatim"""

    loan_status: str = Field(..., min_length=1)


class LoanDetails(BaseModel):
    loan_type: str
    loan_amount: float
    interest_rate: Optional[float] = None
    tenure: float
    loan_status: str
    disbursal_date: Optional[datetime] = None


class RepaymentDetails(BaseModel):
    emi_amount: float
    total_outstanding: float


class LoanResponse(BaseModel):
    """Loan booking with the borrower expanded"""

    id: str
    borrower_id: str
    borrower: Optional[UserResponse] = None
    loan_details: LoanDetails
    repayment_details: RepaymentDetails
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoanEnvelope(BaseModel):
    """Response for loan create/update"""

    message: str
    loan: LoanResponse
