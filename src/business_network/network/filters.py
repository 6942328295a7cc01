# ABOUTME: Filter criteria and the pure predicate applied to directory entries.
# ABOUTME: Profile kind, location substring and free-text search must all pass.

from collections.abc import Iterable
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from business_network.models.profile import CompanyProfile, FreelancerProfile
from business_network.network.directory import DirectoryEntry

ProfileKindFilter = Literal["all", "company", "freelancer"]


class DirectoryFilter(BaseModel):
    """Filter criteria for the member directory."""

    search: Annotated[
        str, Field(description="Text matched against e-mail, names, industry and skills")
    ] = ""

    profile_kind: Annotated[
        ProfileKindFilter, Field(description="Member kind to show, or 'all'")
    ] = "all"

    location: Annotated[str, Field(description="Text matched against the member location")] = ""


def _contains(value: str | None, needle: str) -> bool:
    return value is not None and needle in value.lower()


def _matches_kind(profile: FreelancerProfile | CompanyProfile, criteria: DirectoryFilter) -> bool:
    return criteria.profile_kind == "all" or criteria.profile_kind == profile.profile_kind


def _matches_location(
    profile: FreelancerProfile | CompanyProfile, criteria: DirectoryFilter
) -> bool:
    if not criteria.location:
        return True
    return _contains(profile.location, criteria.location.lower())


def _matches_search(profile: FreelancerProfile | CompanyProfile, criteria: DirectoryFilter) -> bool:
    if not criteria.search:
        return True
    needle = criteria.search.lower()
    if _contains(profile.email, needle):
        return True
    if isinstance(profile, CompanyProfile):
        return _contains(profile.company_name, needle) or _contains(profile.industry, needle)
    return _contains(profile.display_name, needle) or any(
        _contains(skill, needle) for skill in profile.skills
    )


def matches(entry: DirectoryEntry, criteria: DirectoryFilter) -> bool:
    """Return True if a directory entry passes all filter criteria.

    Args:
        entry: The decorated directory entry.
        criteria: Search text, profile kind and location filter.

    Returns:
        True when the kind, location and search predicates all pass.
    """
    profile = entry.profile
    return (
        _matches_kind(profile, criteria)
        and _matches_location(profile, criteria)
        and _matches_search(profile, criteria)
    )


def filter_directory(
    entries: Iterable[DirectoryEntry], criteria: DirectoryFilter
) -> list[DirectoryEntry]:
    """Return the entries matching the criteria, keeping their order."""
    return [entry for entry in entries if matches(entry, criteria)]
