"""Mock persistence providers for testing."""

from dishka import Scope, provide

from lunabeam.domain.repository import (
    ClaimRepository,
    CredentialRepository,
    ProfileRepository,
    SupporterRepository,
    TransactionManager,
)
from lunabeam.persistence.repository.inmemory import (
    InMemoryClaimRepository,
    InMemoryCredentialRepository,
    InMemoryProfileRepository,
    InMemorySupporterRepository,
    InMemoryTransactionManager,
)
from lunabeam.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests of one container;
    every test builds its own container, so tests stay isolated.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_claim_repository(self) -> InMemoryClaimRepository:
        return InMemoryClaimRepository()

    @provide
    def get_profile_repository(self) -> InMemoryProfileRepository:
        return InMemoryProfileRepository()

    @provide
    def get_supporter_repository(self) -> InMemorySupporterRepository:
        return InMemorySupporterRepository()

    @provide
    def get_credential_repository(self) -> InMemoryCredentialRepository:
        return InMemoryCredentialRepository()

    @provide
    def get_claim_repository_interface(
        self, repository: InMemoryClaimRepository
    ) -> ClaimRepository:
        """Provide in-memory claim repository."""
        return repository

    @provide
    def get_profile_repository_interface(
        self, repository: InMemoryProfileRepository
    ) -> ProfileRepository:
        """Provide in-memory profile repository."""
        return repository

    @provide
    def get_supporter_repository_interface(
        self, repository: InMemorySupporterRepository
    ) -> SupporterRepository:
        """Provide in-memory supporter repository."""
        return repository

    @provide
    def get_credential_repository_interface(
        self, repository: InMemoryCredentialRepository
    ) -> CredentialRepository:
        """Provide in-memory credential repository."""
        return repository

    @provide
    def get_transaction_manager(
        self,
        claims: InMemoryClaimRepository,
        profiles: InMemoryProfileRepository,
        supporters: InMemorySupporterRepository,
        credentials: InMemoryCredentialRepository,
    ) -> TransactionManager:
        """Provide snapshot/restore transaction boundary."""
        return InMemoryTransactionManager(claims, profiles, supporters, credentials)
