"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UserNotFoundError(DomainException):
    """No user matches the given identifier"""

    pass


class UserAlreadyExistsError(DomainException):
    """Email, aadhar, mobile or PAN number is already registered"""

    pass


class BorrowerHasLoansError(DomainException):
    """User is still referenced as borrower by loan bookings"""

    pass


class AuthenticationError(DomainException):
    """Credential check failed"""

    pass


class UserNotRegisteredError(AuthenticationError):
    """No user is registered under the given aadhar number"""

    pass


class WrongPasswordError(AuthenticationError):
    """Password does not match the stored hash"""

    pass


class LoanNotFoundError(DomainException):
    """No loan booking matches the given identifier"""

    pass


class InvalidTenureError(DomainException):
    """Tenure must be strictly positive"""

    pass


class LoanValidationError(DomainException):
    """Loan booking was rejected by the store"""

    pass
