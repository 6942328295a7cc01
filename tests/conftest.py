# ABOUTME: Shared pytest fixtures for business-network tests.
# ABOUTME: Provides stores, services, a fake keyring and sample profile helpers.

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from business_network.database import DatabaseService
from business_network.identity import LocalIdentityProvider, ProfileService
from business_network.models import CompanyProfile, FreelancerProfile, ProfileKind
from business_network.network import ConnectionWorkflow, DirectoryService
from business_network.store import InMemoryDocumentStore

FAST_HASH_ITERATIONS = 1_000


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Create an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path inside a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "data.db"


@pytest.fixture
def db_service(temp_db_path: Path) -> DatabaseService:
    """Create a DatabaseService instance with a temporary database."""
    service = DatabaseService(db_path=temp_db_path)
    service.init_db()
    return service


@pytest.fixture
def profiles(memory_store: InMemoryDocumentStore) -> ProfileService:
    """Create a ProfileService over the in-memory store."""
    return ProfileService(memory_store)


@pytest.fixture
def workflow(memory_store: InMemoryDocumentStore) -> ConnectionWorkflow:
    """Create a ConnectionWorkflow over the in-memory store."""
    return ConnectionWorkflow(memory_store)


@pytest.fixture
def directory(profiles: ProfileService, workflow: ConnectionWorkflow) -> DirectoryService:
    """Create a DirectoryService using a small thread pool."""
    return DirectoryService(profiles, workflow, max_workers=4)


@pytest.fixture
def provider(memory_store: InMemoryDocumentStore) -> LocalIdentityProvider:
    """Create a LocalIdentityProvider with cheap password hashing."""
    return LocalIdentityProvider(memory_store, hash_iterations=FAST_HASH_ITERATIONS)


@pytest.fixture
def make_freelancer(profiles: ProfileService) -> Callable[..., FreelancerProfile]:
    """Return a helper that registers a freelancer and applies field changes."""

    def _make(user_id: str, email: str | None = None, **changes: object) -> FreelancerProfile:
        profiles.register_profile(user_id, email or f"{user_id}@example.com", ProfileKind.FREELANCER)
        if changes:
            return profiles.update_profile(user_id, dict(changes))  # type: ignore[return-value]
        return profiles.get_profile(user_id)  # type: ignore[return-value]

    return _make


@pytest.fixture
def make_company(profiles: ProfileService) -> Callable[..., CompanyProfile]:
    """Return a helper that registers a company and applies field changes."""

    def _make(user_id: str, email: str | None = None, **changes: object) -> CompanyProfile:
        profiles.register_profile(user_id, email or f"{user_id}@example.com", ProfileKind.COMPANY)
        if changes:
            return profiles.update_profile(user_id, dict(changes))  # type: ignore[return-value]
        return profiles.get_profile(user_id)  # type: ignore[return-value]

    return _make


@pytest.fixture
def fake_keyring() -> Generator[MagicMock, None, None]:
    """Patch the keyring used by SessionManager with a dict-backed fake."""
    passwords: dict[tuple[str, str], str] = {}

    def _set(service: str, name: str, value: str) -> None:
        passwords[(service, name)] = value

    def _get(service: str, name: str) -> str | None:
        return passwords.get((service, name))

    def _delete(service: str, name: str) -> None:
        passwords.pop((service, name), None)

    with patch("business_network.auth.session_manager.keyring") as mock:
        mock.set_password = MagicMock(side_effect=_set)
        mock.get_password = MagicMock(side_effect=_get)
        mock.delete_password = MagicMock(side_effect=_delete)
        mock.passwords = passwords
        yield mock
