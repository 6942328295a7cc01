# ABOUTME: Tests for network statistics aggregation.
# ABOUTME: Runs get_network_stats against the SQLite store and the in-memory store.

from collections.abc import Callable

from business_network.database import DatabaseService
from business_network.database.stats import get_network_stats
from business_network.identity import ProfileService
from business_network.models import CompanyProfile, FreelancerProfile, ProfileKind
from business_network.network import ConnectionWorkflow
from business_network.store import InMemoryDocumentStore


class TestGetNetworkStats:
    """Tests for get_network_stats."""

    def test_empty_store(self, db_service: DatabaseService) -> None:
        """Test that an empty database gives zero counts."""
        assert get_network_stats(db_service) == {
            "total_members": 0,
            "kind_distribution": {},
            "unique_locations": 0,
            "total_connections": 0,
            "status_distribution": {},
        }

    def test_counts_members_and_connections(
        self,
        memory_store: InMemoryDocumentStore,
        workflow: ConnectionWorkflow,
        make_freelancer: Callable[..., FreelancerProfile],
        make_company: Callable[..., CompanyProfile],
    ) -> None:
        """Test kind, location and status aggregation."""
        make_freelancer("f1", location="Bern")
        make_freelancer("f2", location=" bern ")
        make_company("c1", location="Zurich")
        make_company("c2")
        workflow.request("f1", "c1")
        workflow.request("f2", "c1")
        workflow.accept("f2", "c1")

        stats = get_network_stats(memory_store)

        assert stats["total_members"] == 4
        assert stats["kind_distribution"] == {"freelancer": 2, "company": 2}
        assert stats["unique_locations"] == 2
        assert stats["total_connections"] == 2
        assert stats["status_distribution"] == {"pending": 1, "connected": 1}

    def test_sqlite_store(self, db_service: DatabaseService) -> None:
        """Test that the SQLite store aggregates the same way."""
        profiles = ProfileService(db_service)
        profiles.register_profile("f1", "f1@x.com", ProfileKind.FREELANCER)
        profiles.register_profile("c1", "c1@x.com", ProfileKind.COMPANY)
        ConnectionWorkflow(db_service).request("f1", "c1")

        stats = get_network_stats(db_service)

        assert stats["total_members"] == 2
        assert stats["status_distribution"] == {"pending": 1}
