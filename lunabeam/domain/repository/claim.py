"""Claim repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from lunabeam.domain.model.claim import Claim
from lunabeam.domain.value import ClaimId, ClaimStatus, ClaimToken, IdentityId


class ClaimRepository(ABC):
    """Repository for Claim entity.

    Defines the contract for claim persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, claim_id: ClaimId) -> Claim | None:
        """Find a claim by ID.

        Args:
            claim_id: The claim's unique identifier

        Returns:
            The claim if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: ClaimToken) -> Claim | None:
        """Find a claim by token.

        Used when the invitee opens the claim link.

        Args:
            token: The claim token

        Returns:
            The claim if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_subject(self, subject_id: IdentityId) -> list[Claim]:
        """Find pending claims for a subject, including ones past their expiry.

        Args:
            subject_id: The identity being claimed

        Returns:
            Pending claims for the subject
        """
        pass

    @abstractmethod
    async def add(self, claim: Claim) -> Claim:
        """Insert a new claim.

        Args:
            claim: The claim to insert

        Returns:
            The inserted claim

        Raises:
            DuplicateIdentityError: If a pending claim already exists for the subject
        """
        pass

    @abstractmethod
    async def update_if_pending(
        self, claim: Claim, unexpired_at: datetime | None = None
    ) -> bool:
        """Write a claim's lifecycle fields if the stored claim is still pending.

        This is the conditional write guarding every transition out of
        pending. Of two concurrent callers, only one observes True.

        Args:
            claim: The claim in its new state
            unexpired_at: If given, also require the stored claim to expire after it

        Returns:
            True if the stored claim was updated, False otherwise
        """
        pass

    @abstractmethod
    async def find_by_issuer(
        self,
        issuer_id: IdentityId,
        status: ClaimStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Claim]:
        """Find claims by issuer with pagination, newest first.

        Args:
            issuer_id: The issuer's identity
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of claims
        """
        pass
