# ABOUTME: Tests for the profile service.
# ABOUTME: Covers registration, lookups, guarded updates, role changes and deletion.

from collections.abc import Callable

import pytest

from business_network.errors import AlreadyExistsError, NotFoundError
from business_network.identity import (
    ProfileAlreadyExists,
    ProfileNotFound,
    ProfileService,
    ProfileUpdateError,
)
from business_network.models import (
    CompanyProfile,
    FreelancerProfile,
    ProfileKind,
    ProfileRole,
)
from business_network.store import InMemoryDocumentStore


class TestRegisterProfile:
    """Tests for register_profile."""

    def test_registers_blank_profile(self, profiles: ProfileService) -> None:
        """Test that a new profile is stored with an empty bag."""
        profile = profiles.register_profile("u1", "a@x.com", ProfileKind.COMPANY)

        assert isinstance(profile, CompanyProfile)
        assert profiles.get_profile("u1") == profile

    def test_duplicate_id_rejected(self, profiles: ProfileService) -> None:
        """Test that a user id can only be registered once."""
        profiles.register_profile("u1", "a@x.com", ProfileKind.COMPANY)

        with pytest.raises(ProfileAlreadyExists):
            profiles.register_profile("u1", "a@x.com", ProfileKind.FREELANCER)
        assert isinstance(profiles.get_profile("u1"), CompanyProfile)

    def test_profile_already_exists_is_already_exists(self) -> None:
        """Test the error taxonomy of ProfileAlreadyExists."""
        assert issubclass(ProfileAlreadyExists, AlreadyExistsError)


class TestLookups:
    """Tests for get_profile, find_by_email and list_profiles."""

    def test_get_missing_raises(self, profiles: ProfileService) -> None:
        """Test that an unknown id raises ProfileNotFound."""
        with pytest.raises(ProfileNotFound) as exc_info:
            profiles.get_profile("ghost")

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.user_id == "ghost"

    def test_find_by_email(
        self, profiles: ProfileService, make_freelancer: Callable[..., FreelancerProfile]
    ) -> None:
        """Test lookup by e-mail address."""
        make_freelancer("f1", email="anna@x.com")

        found = profiles.find_by_email("anna@x.com")
        assert found is not None and found.id == "f1"
        assert profiles.find_by_email("nobody@x.com") is None

    def test_list_profiles_excludes_caller(
        self,
        profiles: ProfileService,
        make_freelancer: Callable[..., FreelancerProfile],
        make_company: Callable[..., CompanyProfile],
    ) -> None:
        """Test that list_profiles keeps order and can leave one member out."""
        make_freelancer("f1")
        make_company("c1")
        make_freelancer("f2")

        assert [p.id for p in profiles.list_profiles()] == ["f1", "c1", "f2"]
        assert [p.id for p in profiles.list_profiles(exclude_user_id="c1")] == ["f1", "f2"]


class TestUpdateProfile:
    """Tests for update_profile."""

    def test_updates_kind_fields(
        self, profiles: ProfileService, make_freelancer: Callable[..., FreelancerProfile]
    ) -> None:
        """Test that freelancer fields and location are stored."""
        created = make_freelancer("f1")

        updated = profiles.update_profile(
            "f1", {"display_name": "Anna", "skills": ["go", "go", "sql"], "location": "Bern"}
        )

        assert updated.display_name == "Anna"  # type: ignore[union-attr]
        assert updated.skills == ["go", "sql"]  # type: ignore[union-attr]
        assert updated.updated_at >= created.updated_at
        assert profiles.get_profile("f1") == updated

    def test_update_keeps_untouched_fields(
        self, profiles: ProfileService, make_company: Callable[..., CompanyProfile]
    ) -> None:
        """Test that an update only changes the named fields."""
        make_company("c1", company_name="Acme", industry="Consulting")

        profiles.update_profile("c1", {"location": "Zurich"})

        stored = profiles.get_profile("c1")
        assert stored.company_name == "Acme"  # type: ignore[union-attr]
        assert stored.industry == "Consulting"  # type: ignore[union-attr]
        assert stored.location == "Zurich"

    @pytest.mark.parametrize("field", ["id", "email", "profile_kind", "role", "created_at"])
    def test_immutable_fields_rejected(
        self,
        profiles: ProfileService,
        make_company: Callable[..., CompanyProfile],
        field: str,
    ) -> None:
        """Test that identity fields cannot be changed through an update."""
        make_company("c1")

        with pytest.raises(ProfileUpdateError):
            profiles.update_profile("c1", {field: "freelancer"})

        assert isinstance(profiles.get_profile("c1"), CompanyProfile)

    def test_other_kind_fields_rejected(
        self, profiles: ProfileService, make_company: Callable[..., CompanyProfile]
    ) -> None:
        """Test that a company cannot be given freelancer fields."""
        make_company("c1")

        with pytest.raises(ProfileUpdateError, match="skills"):
            profiles.update_profile("c1", {"skills": ["go"]})

    def test_invalid_value_rejected(
        self, profiles: ProfileService, make_freelancer: Callable[..., FreelancerProfile]
    ) -> None:
        """Test that validation errors become ProfileUpdateError."""
        make_freelancer("f1")

        with pytest.raises(ProfileUpdateError):
            profiles.update_profile("f1", {"experience_years": -2})
        assert profiles.get_profile("f1").experience_years is None  # type: ignore[union-attr]

    def test_update_missing_profile(self, profiles: ProfileService) -> None:
        """Test that updating an unknown member raises ProfileNotFound."""
        with pytest.raises(ProfileNotFound):
            profiles.update_profile("ghost", {"location": "Bern"})


class TestRoleAndDelete:
    """Tests for set_role and delete_profile."""

    def test_set_role(
        self, profiles: ProfileService, make_freelancer: Callable[..., FreelancerProfile]
    ) -> None:
        """Test that the role can be changed by the admin operation."""
        make_freelancer("f1")

        updated = profiles.set_role("f1", ProfileRole.ADMIN)

        assert updated.role == ProfileRole.ADMIN
        assert profiles.get_profile("f1").role == ProfileRole.ADMIN

    def test_delete_profile(
        self,
        profiles: ProfileService,
        memory_store: InMemoryDocumentStore,
        make_company: Callable[..., CompanyProfile],
    ) -> None:
        """Test that delete removes the record and fails the second time."""
        make_company("c1")

        profiles.delete_profile("c1")

        assert memory_store.get("users", "c1") is None
        with pytest.raises(ProfileNotFound):
            profiles.delete_profile("c1")
