# ABOUTME: Models package for business network data structures.
# ABOUTME: Exports the Document table, profile models and the Connection model.

from business_network.models.connection import (
    Connection,
    ConnectionStatus,
    connection_key,
)
from business_network.models.document import Document
from business_network.models.profile import (
    CompanyProfile,
    FreelancerProfile,
    Profile,
    ProfileKind,
    ProfileRole,
    new_profile,
    parse_profile,
)

__all__ = [
    "CompanyProfile",
    "Connection",
    "ConnectionStatus",
    "Document",
    "FreelancerProfile",
    "Profile",
    "ProfileKind",
    "ProfileRole",
    "connection_key",
    "new_profile",
    "parse_profile",
]
