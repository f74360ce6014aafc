"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (malformed input)."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class DuplicateIdentityError(BusinessRuleViolationError):
    """Raised when a subject already has a live pending claim."""

    def __init__(self, subject_id: str):
        self.subject_id = subject_id
        super().__init__(f"A pending claim already exists for {subject_id}")


class CredentialPolicyError(ValidationError):
    """Raised when a new credential does not satisfy the password policy."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when an identity acts on a resource it does not manage."""

    def __init__(self, resource: str, resource_id: str, identity_id: str):
        super().__init__(
            f"{identity_id} is not authorized to manage {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PersistenceError(DomainError):
    """Raised when the store fails to read or write.

    Infrastructure failure, distinct from business rejections; callers may
    retry.
    """

    pass


class DeliveryError(DomainError):
    """Raised when an invitation could not be delivered.

    Non-fatal for claim creation: the claim remains valid and the caller
    can retry sending.
    """

    pass


class ContactInUseError(BusinessRuleViolationError):
    """Raised when a sign-in address already belongs to another identity."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account already uses {email}")
