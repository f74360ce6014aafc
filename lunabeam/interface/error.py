"""Interface layer error translation.

Maps domain exceptions to HTTP errors. Business rejections of claims are
not exceptions and never pass through here.
"""

from fastapi import HTTPException, status

from lunabeam.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    # CredentialPolicyError is a ValidationError
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    # DuplicateIdentityError and ContactInUseError are BusinessRuleViolationErrors
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
