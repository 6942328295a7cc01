# ABOUTME: Profile service: one profile record per member in the users collection.
# ABOUTME: Handles registration of blank profiles, lookups, edits, role changes and deletion.

from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError

from business_network.identity.exceptions import (
    ProfileAlreadyExists,
    ProfileNotFound,
    ProfileUpdateError,
)
from business_network.identity.provider import normalize_email
from business_network.models.profile import (
    IMMUTABLE_PROFILE_FIELDS,
    CompanyProfile,
    FreelancerProfile,
    ProfileKind,
    ProfileRole,
    new_profile,
    parse_profile,
)
from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.ports import DocumentStore

logger = structlog.get_logger(__name__)

USERS_COLLECTION = "users"

AnyProfile = FreelancerProfile | CompanyProfile


class ProfileService:
    """Reads and writes member profiles in the document store."""

    def __init__(self, store: DocumentStore) -> None:
        """Initialize the profile service.

        Args:
            store: Document store holding the users collection.
        """
        self._store = store

    def register_profile(self, user_id: str, email: str, profile_kind: ProfileKind) -> AnyProfile:
        """Create the blank profile of a newly registered member.

        Args:
            user_id: Id assigned by the identity provider.
            email: The account's e-mail address, stored lower-cased and trimmed.
            profile_kind: company or freelancer; fixed from now on.

        Returns:
            The stored profile.

        Raises:
            ProfileAlreadyExists: If a profile already exists for user_id.
        """
        profile = new_profile(user_id, normalize_email(email), profile_kind)
        try:
            self._store.create(USERS_COLLECTION, user_id, profile.to_record())
        except DocumentAlreadyExists as e:
            raise ProfileAlreadyExists(f"A profile already exists for user '{user_id}'") from e
        logger.info("profile_registered", user_id=user_id, profile_kind=profile.profile_kind)
        return profile

    def get_profile(self, user_id: str) -> AnyProfile:
        """Return the profile of a member.

        Raises:
            ProfileNotFound: If no profile exists for user_id.
        """
        record = self._store.get(USERS_COLLECTION, user_id)
        if record is None:
            raise ProfileNotFound(user_id)
        return parse_profile(record)

    def find_by_email(self, email: str) -> AnyProfile | None:
        """Return the profile registered with an e-mail address, or None."""
        records = self._store.query_equals(USERS_COLLECTION, "email", normalize_email(email))
        return parse_profile(records[0]) if records else None

    def list_profiles(self, exclude_user_id: str | None = None) -> list[AnyProfile]:
        """Return all profiles in insertion order.

        Args:
            exclude_user_id: Optional member id to leave out (the caller).
        """
        return [
            parse_profile(record)
            for record in self._store.list_all(USERS_COLLECTION)
            if record.get("id") != exclude_user_id
        ]

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> AnyProfile:
        """Apply field changes to a member's profile.

        Only shared fields (location) and fields of the profile's own kind
        can be changed. updated_at is bumped on every call.

        Args:
            user_id: Member whose profile is edited.
            changes: Mapping of field name to new value.

        Returns:
            The updated profile.

        Raises:
            ProfileNotFound: If no profile exists for user_id.
            ProfileUpdateError: If a field is immutable, unknown for the kind, or invalid.
        """
        profile = self.get_profile(user_id)

        forbidden = IMMUTABLE_PROFILE_FIELDS & changes.keys()
        if forbidden:
            raise ProfileUpdateError(f"Cannot change {', '.join(sorted(forbidden))}")
        unknown = set(changes) - set(type(profile).model_fields) - {"updated_at"}
        if unknown:
            raise ProfileUpdateError(
                f"Unknown field(s) for a {profile.profile_kind} profile: {', '.join(sorted(unknown))}"
            )

        merged = {**profile.to_record(), **changes, "updated_at": datetime.now(UTC)}
        try:
            updated = type(profile).model_validate(merged)
        except ValidationError as e:
            raise ProfileUpdateError(f"Invalid profile data: {e}") from e

        record = updated.to_record()
        self._store.put(
            USERS_COLLECTION,
            user_id,
            {name: record[name] for name in [*changes, "updated_at"]},
            merge=True,
        )
        logger.info("profile_updated", user_id=user_id, fields=sorted(changes))
        return updated

    def set_role(self, user_id: str, role: ProfileRole) -> AnyProfile:
        """Change a member's role.

        Raises:
            ProfileNotFound: If no profile exists for user_id.
        """
        profile = self.get_profile(user_id)
        updated = profile.model_copy(
            update={"role": ProfileRole(role), "updated_at": datetime.now(UTC)}
        )
        record = updated.to_record()
        self._store.put(
            USERS_COLLECTION,
            user_id,
            {"role": record["role"], "updated_at": record["updated_at"]},
            merge=True,
        )
        logger.info("profile_role_changed", user_id=user_id, role=updated.role.value)
        return updated

    def delete_profile(self, user_id: str) -> None:
        """Delete a member's profile (admin operation).

        Raises:
            ProfileNotFound: If no profile exists for user_id.
        """
        if not self._store.delete(USERS_COLLECTION, user_id):
            raise ProfileNotFound(user_id)
        logger.info("profile_deleted", user_id=user_id)
