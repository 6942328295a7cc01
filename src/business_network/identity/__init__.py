# ABOUTME: Identity package: member profiles, accounts, sessions and registration.
# ABOUTME: Exports ProfileService, LocalIdentityProvider and register_user.

from business_network.identity.exceptions import (
    EmailAlreadyInUse,
    InvalidCredentials,
    InvalidRegistration,
    ProfileAlreadyExists,
    ProfileNotFound,
    ProfileUpdateError,
)
from business_network.identity.provider import LocalIdentityProvider, Session
from business_network.identity.registration import register_user
from business_network.identity.service import ProfileService

__all__ = [
    "EmailAlreadyInUse",
    "InvalidCredentials",
    "InvalidRegistration",
    "LocalIdentityProvider",
    "ProfileAlreadyExists",
    "ProfileNotFound",
    "ProfileService",
    "ProfileUpdateError",
    "Session",
    "register_user",
]
