# ABOUTME: Integration tests running registration, connections and directory on SQLite.
# ABOUTME: Wires the real services to a temporary database file.

from pathlib import Path

import pytest

from business_network.database import DatabaseService
from business_network.errors import AlreadyExistsError, NotFoundError
from business_network.identity import LocalIdentityProvider, ProfileService, register_user
from business_network.models import ConnectionStatus, ProfileKind
from business_network.network import (
    ConnectionWorkflow,
    DirectoryFilter,
    DirectoryService,
    filter_directory,
)

Services = tuple[LocalIdentityProvider, ProfileService, ConnectionWorkflow, DirectoryService]


@pytest.fixture
def services(temp_db_path: Path) -> Services:
    """Wire the services to a fresh SQLite database."""
    store = DatabaseService(db_path=temp_db_path)
    store.init_db()
    profiles = ProfileService(store)
    workflow = ConnectionWorkflow(store)
    provider = LocalIdentityProvider(store, hash_iterations=1_000)
    return provider, profiles, workflow, DirectoryService(profiles, workflow, max_workers=4)


class TestEndToEnd:
    """End-to-end scenarios over the SQLite store."""

    def test_connect_then_disconnect(self, services: Services) -> None:
        """Test that the directory follows the connection through its lifecycle."""
        provider, profiles, workflow, directory = services
        a, _ = register_user(provider, profiles, "a@x.com", "secret1", ProfileKind.FREELANCER)
        b, _ = register_user(provider, profiles, "b@x.com", "secret1", ProfileKind.COMPANY)

        workflow.request(a.id, b.id)
        workflow.accept(a.id, b.id)

        listing = directory.list_directory(a.id)
        assert [(e.profile.id, e.status) for e in listing] == [
            (b.id, ConnectionStatus.CONNECTED)
        ]

        workflow.remove(a.id, b.id)

        listing = directory.list_directory(a.id)
        assert [(e.profile.id, e.status) for e in listing] == [(b.id, ConnectionStatus.NONE)]

    def test_request_rules_on_sqlite(self, services: Services) -> None:
        """Test duplicate rejection and accept direction against the database."""
        provider, profiles, workflow, _ = services
        a, _ = register_user(provider, profiles, "a@x.com", "secret1", ProfileKind.FREELANCER)
        b, _ = register_user(provider, profiles, "b@x.com", "secret1", ProfileKind.COMPANY)

        workflow.request(a.id, b.id)

        with pytest.raises(AlreadyExistsError):
            workflow.request(b.id, a.id)
        with pytest.raises(NotFoundError):
            workflow.accept(b.id, a.id)

        assert workflow.get_status(b.id, a.id) == ConnectionStatus.PENDING
        assert workflow.remove(b.id, a.id) is True
        assert workflow.remove(b.id, a.id) is False

    def test_list_connections_on_sqlite(self, services: Services) -> None:
        """Test that sent and received records are listed once per counterpart."""
        provider, profiles, workflow, _ = services
        a, _ = register_user(provider, profiles, "a@x.com", "secret1", ProfileKind.FREELANCER)
        b, _ = register_user(provider, profiles, "b@x.com", "secret1", ProfileKind.COMPANY)
        c, _ = register_user(provider, profiles, "c@x.com", "secret1", ProfileKind.COMPANY)

        workflow.request(a.id, b.id)
        workflow.request(c.id, a.id)
        workflow.accept(c.id, a.id)

        found = workflow.list_connections(a.id)
        assert sorted(conn.counterpart_of(a.id) for conn in found) == sorted([b.id, c.id])

        connected = workflow.list_connections(a.id, status=ConnectionStatus.CONNECTED)
        assert [conn.counterpart_of(a.id) for conn in connected] == [c.id]

    def test_filtered_directory(self, services: Services) -> None:
        """Test filtering a decorated directory built from stored profiles."""
        provider, profiles, workflow, directory = services
        a, _ = register_user(provider, profiles, "a@x.com", "secret1", ProfileKind.FREELANCER)
        b, _ = register_user(provider, profiles, "b@x.com", "secret1", ProfileKind.COMPANY)
        f, _ = register_user(provider, profiles, "f@x.com", "secret1", ProfileKind.FREELANCER)
        profiles.update_profile(b.id, {"company_name": "Acme", "location": "Bern"})
        profiles.update_profile(f.id, {"skills": ["go"]})
        workflow.request(a.id, b.id)

        listing = directory.list_directory(a.id)

        companies = filter_directory(listing, DirectoryFilter(profile_kind="company"))
        assert [(e.profile.id, e.status) for e in companies] == [
            (b.id, ConnectionStatus.PENDING)
        ]
        gophers = filter_directory(listing, DirectoryFilter(search="GO"))
        assert [e.profile.id for e in gophers] == [f.id]
        assert filter_directory(listing, DirectoryFilter(location="bern"))[0].profile.id == b.id
