"""
Adversarial tests for race condition attack prevention.

Verifies that concurrent registrations for the same identity are handled
atomically, preventing attackers from exploiting race conditions to:
- Create duplicate accounts for one username or email
- Silently overwrite an existing account's credentials

Defense: insert_if_absent() holds the directory lock across the username
check, the email scan and the write.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from authcore.adapters.repository.memory import InMemoryUserRepository
from authcore.domain.auth import AuthService
from authcore.domain.errors import EmailConflict, UsernameConflict
from authcore.domain.ports import AccountType, InsertResult, RegisteredUser, UserRecord

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial


def run_concurrently(func, count: int) -> list:
    """Release ``count`` calls of func(i) at once and collect results."""
    barrier = threading.Barrier(count)

    def worker(i: int):
        barrier.wait()
        return func(i)

    with ThreadPoolExecutor(max_workers=count) as executor:
        futures = [executor.submit(worker, i) for i in range(count)]
        return [f.result() for f in futures]


class TestRaceConditionAttacks:
    """
    Adversarial tests simulating concurrent registration attacks.

    Each test launches many registrations at once through a barrier so
    their lookup checks overlap.
    """

    @pytest.mark.parametrize("num_attackers", [5, 20])
    def test_same_username_exactly_one_succeeds(
        self,
        service: AuthService,
        repository: InMemoryUserRepository,
        make_registration,
        num_attackers: int,
    ) -> None:
        """N concurrent registrations of one username: one success, N-1 conflicts."""
        results = run_concurrently(
            lambda i: service.register(
                make_registration(username="victim", email=f"attacker{i}@example.com")
            ),
            num_attackers,
        )

        successes = [r for r in results if isinstance(r, RegisteredUser)]
        conflicts = [r for r in results if isinstance(r, UsernameConflict)]
        assert len(successes) == 1, f"Race condition: {len(successes)} registrations succeeded"
        assert len(conflicts) == num_attackers - 1
        assert len(repository) == 1

        # The stored record belongs to the single winner
        stored = repository.find_by_username("victim")
        assert stored is not None
        assert stored.email == successes[0].email

    def test_same_email_exactly_one_succeeds(
        self, service: AuthService, repository: InMemoryUserRepository, make_registration
    ) -> None:
        """Same email exactly one succeeds."""
        num_attackers = 10
        results = run_concurrently(
            lambda i: service.register(
                make_registration(username=f"attacker{i}", email="shared@example.com")
            ),
            num_attackers,
        )

        assert sum(isinstance(r, RegisteredUser) for r in results) == 1
        assert sum(isinstance(r, EmailConflict) for r in results) == num_attackers - 1
        assert len(repository) == 1

    def test_winner_password_not_overwritten(
        self, service: AuthService, repository: InMemoryUserRepository, hasher, make_registration
    ) -> None:
        """Losing registrations never replace the winner's credentials."""
        passwords = [f"Pass!{i:02d}" for i in range(10)]
        results = run_concurrently(
            lambda i: service.register(
                make_registration(username="victim", email=f"v{i}@example.com", password=passwords[i])
            ),
            len(passwords),
        )

        winner = next(i for i, r in enumerate(results) if isinstance(r, RegisteredUser))
        stored = repository.find_by_username("victim")
        assert hasher.verify(passwords[winner], stored.password_hash)
        for i, password in enumerate(passwords):
            if i != winner:
                assert not hasher.verify(password, stored.password_hash)

    def test_distinct_identities_all_succeed(
        self, service: AuthService, repository: InMemoryUserRepository, make_registration
    ) -> None:
        """Concurrency does not cause false conflicts."""
        results = run_concurrently(
            lambda i: service.register(
                make_registration(username=f"user{i:02d}", email=f"user{i}@example.com")
            ),
            20,
        )

        assert all(isinstance(r, RegisteredUser) for r in results)
        assert len(repository) == 20


class TestAtomicInsert:
    """Direct concurrent calls to insert_if_absent()."""

    def test_concurrent_inserts_same_username(self, repository: InMemoryUserRepository) -> None:
        """Concurrent inserts same username."""
        def attack(i: int) -> InsertResult:
            return repository.insert_if_absent(
                UserRecord("victim", f"a{i}@example.com", AccountType.USER, "salt", f"hash{i}")
            )

        results = run_concurrently(attack, 20)

        assert results.count(InsertResult.INSERTED) == 1
        assert results.count(InsertResult.USERNAME_TAKEN) == 19
        assert len(repository) == 1

    def test_lookups_during_inserts(self, repository: InMemoryUserRepository) -> None:
        """Email scans never fail while other threads insert."""

        def worker(i: int):
            if i % 2:
                return repository.insert_if_absent(
                    UserRecord(f"user{i}", f"u{i}@example.com", AccountType.USER, "salt", "hash")
                )
            return repository.find_by_email("missing@example.com")

        results = run_concurrently(worker, 40)

        assert results.count(InsertResult.INSERTED) == 20
        assert results.count(None) == 20
