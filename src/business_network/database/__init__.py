# ABOUTME: Database package for business network persistence layer.
# ABOUTME: Provides DatabaseService, the SQLite DocumentStore using SQLModel.

from business_network.database.service import DatabaseService

__all__ = ["DatabaseService"]
