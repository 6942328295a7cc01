# ABOUTME: Network statistics for the status command.
# ABOUTME: Aggregates member counts by kind and connection counts by status.

from collections import Counter
from typing import Any

from business_network.identity.service import USERS_COLLECTION
from business_network.network.workflow import CONNECTIONS_COLLECTION
from business_network.store.ports import DocumentStore


def get_network_stats(store: DocumentStore) -> dict[str, Any]:
    """Get statistics about stored members and connections.

    Args:
        store: The document store to read from.

    Returns:
        Dictionary containing:
            - total_members: Total number of stored profiles
            - kind_distribution: Dict mapping profile kind to count
            - unique_locations: Count of distinct non-empty locations
            - total_connections: Number of connection records
            - status_distribution: Dict mapping connection status to count
    """
    profiles = store.list_all(USERS_COLLECTION)
    connections = store.list_all(CONNECTIONS_COLLECTION)

    kinds = Counter(str(p.get("profile_kind")) for p in profiles)
    locations = {
        p["location"].strip().lower() for p in profiles if (p.get("location") or "").strip()
    }
    statuses = Counter(str(c.get("status")) for c in connections)

    return {
        "total_members": len(profiles),
        "kind_distribution": dict(kinds),
        "unique_locations": len(locations),
        "total_connections": len(connections),
        "status_distribution": dict(statuses),
    }
