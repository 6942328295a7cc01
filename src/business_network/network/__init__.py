# ABOUTME: Network package: connection workflow, member directory and directory filters.
# ABOUTME: Exports ConnectionWorkflow, DirectoryService, DirectoryFilter and related types.

from business_network.network.directory import DirectoryEntry, DirectoryService
from business_network.network.exceptions import (
    ConnectionAlreadyExists,
    ConnectionNotFound,
    SelfConnectionError,
)
from business_network.network.filters import DirectoryFilter, filter_directory, matches
from business_network.network.workflow import ConnectionWorkflow

__all__ = [
    "ConnectionAlreadyExists",
    "ConnectionNotFound",
    "ConnectionWorkflow",
    "DirectoryEntry",
    "DirectoryFilter",
    "DirectoryService",
    "SelfConnectionError",
    "filter_directory",
    "matches",
]
