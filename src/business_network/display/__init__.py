# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports table renderers and error panels used by the CLI.

from business_network.display.errors import (
    display_error,
    display_login_help,
    display_store_unavailable,
)
from business_network.display.tables import ConnectionTable, DirectoryTable

__all__ = [
    "ConnectionTable",
    "DirectoryTable",
    "display_error",
    "display_login_help",
    "display_store_unavailable",
]
