# ABOUTME: Directory service listing every other member with the caller's connection status.
# ABOUTME: Status lookups run on a thread pool; one failed lookup does not abort the listing.

from concurrent.futures import ThreadPoolExecutor

import structlog
from pydantic import BaseModel, ValidationError

from business_network.errors import StoreUnavailableError
from business_network.identity.service import AnyProfile, ProfileService
from business_network.models.connection import ConnectionStatus
from business_network.models.profile import Profile
from business_network.network.workflow import ConnectionWorkflow, require_caller

logger = structlog.get_logger(__name__)


class DirectoryEntry(BaseModel):
    """A member profile decorated with the caller's relationship status."""

    profile: Profile
    status: ConnectionStatus = ConnectionStatus.NONE
    lookup_failed: bool = False


class DirectoryService:
    """Builds the decorated member directory for a caller."""

    def __init__(
        self,
        profiles: ProfileService,
        workflow: ConnectionWorkflow,
        max_workers: int = 8,
    ) -> None:
        """Initialize the directory service.

        Args:
            profiles: Profile service for the member list.
            workflow: Connection workflow for status lookups.
            max_workers: Threads used for status lookups; 1 runs them in order.
        """
        self._profiles = profiles
        self._workflow = workflow
        self._max_workers = max(1, max_workers)

    def _decorate(self, caller_id: str, profile: AnyProfile) -> DirectoryEntry:
        try:
            status = self._workflow.get_status(caller_id, profile.id)
        except (StoreUnavailableError, ValidationError) as e:
            logger.warning(
                "directory_status_lookup_failed",
                caller_id=caller_id,
                candidate_id=profile.id,
                error=str(e),
            )
            return DirectoryEntry(profile=profile, lookup_failed=True)
        return DirectoryEntry(profile=profile, status=status)

    def list_directory(self, caller_id: str) -> list[DirectoryEntry]:
        """Return every member except the caller, with the caller's status for each.

        Args:
            caller_id: The signed-in member.

        Returns:
            Directory entries in profile-list order.

        Raises:
            UnauthenticatedError: If caller_id is missing.
            StoreUnavailableError: If the member list itself cannot be read.
        """
        require_caller(caller_id)
        candidates = self._profiles.list_profiles(exclude_user_id=caller_id)
        if not candidates:
            return []

        if self._max_workers == 1 or len(candidates) == 1:
            entries = [self._decorate(caller_id, profile) for profile in candidates]
        else:
            workers = min(self._max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                entries = list(pool.map(lambda p: self._decorate(caller_id, p), candidates))

        logger.debug("directory_listed", caller_id=caller_id, count=len(entries))
        return entries
