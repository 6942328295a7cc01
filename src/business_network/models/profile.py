# ABOUTME: Pydantic models for member profiles (freelancer and company kinds).
# ABOUTME: Profiles are discriminated on profile_kind and serialized as JSON records.

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class ProfileKind(str, Enum):
    """Kind of member, fixed at registration."""

    COMPANY = "company"
    FREELANCER = "freelancer"


class ProfileRole(str, Enum):
    """Access role of a member."""

    USER = "user"
    ADMIN = "admin"


# Fields no profile update may touch
IMMUTABLE_PROFILE_FIELDS = frozenset({"id", "email", "profile_kind", "role", "created_at"})


def _now() -> datetime:
    return datetime.now(UTC)


class BaseProfile(BaseModel):
    """Fields shared by every profile kind."""

    model_config = {"validate_assignment": True}

    id: Annotated[str, Field(min_length=1, description="Stable id from the identity provider")]
    email: str
    role: ProfileRole = ProfileRole.USER
    location: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-compatible record stored for this profile."""
        return self.model_dump(mode="json")


class FreelancerProfile(BaseProfile):
    """A freelancer member."""

    profile_kind: Literal["freelancer"] = "freelancer"

    display_name: str = ""
    title: str = ""
    skills: list[str] = Field(default_factory=list)
    experience_years: Annotated[int | None, Field(ge=0)] = None
    portfolio_url: str = ""
    education: str = ""

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str]) -> list[str]:
        """Skills behave as a set: strip blanks and drop repeats, keep first order."""
        seen: dict[str, None] = {}
        for skill in value:
            skill = skill.strip()
            if skill:
                seen.setdefault(skill, None)
        return list(seen)

    @property
    def name(self) -> str:
        """Return the name shown for this member."""
        return self.display_name


class CompanyProfile(BaseProfile):
    """A company member."""

    profile_kind: Literal["company"] = "company"

    company_name: str = ""
    industry: str = ""
    employee_count: Annotated[int | None, Field(ge=0)] = None
    year_founded: Annotated[int | None, Field(ge=1000, le=9999)] = None
    website: str = ""
    services: str = ""

    @property
    def name(self) -> str:
        """Return the name shown for this member."""
        return self.company_name


Profile = Annotated[FreelancerProfile | CompanyProfile, Field(discriminator="profile_kind")]

_profile_adapter: TypeAdapter[FreelancerProfile | CompanyProfile] = TypeAdapter(Profile)


def parse_profile(record: dict[str, Any]) -> FreelancerProfile | CompanyProfile:
    """Build the right profile model from a stored record.

    Args:
        record: JSON record as read from the document store.

    Returns:
        FreelancerProfile or CompanyProfile depending on profile_kind.
    """
    return _profile_adapter.validate_python(record)


def new_profile(
    user_id: str, email: str, profile_kind: ProfileKind
) -> FreelancerProfile | CompanyProfile:
    """Create a blank profile of the given kind, as done at registration."""
    now = _now()
    if ProfileKind(profile_kind) is ProfileKind.COMPANY:
        return CompanyProfile(id=user_id, email=email, created_at=now, updated_at=now)
    return FreelancerProfile(id=user_id, email=email, created_at=now, updated_at=now)
