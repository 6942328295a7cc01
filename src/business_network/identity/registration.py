# ABOUTME: Registration flow: account creation, blank profile, and first session.
# ABOUTME: Mirrors the sign-up form: e-mail, password and account type.

import structlog

from business_network.identity.provider import LocalIdentityProvider, Session
from business_network.identity.service import AnyProfile, ProfileService
from business_network.models.profile import ProfileKind

logger = structlog.get_logger(__name__)


def register_user(
    provider: LocalIdentityProvider,
    profiles: ProfileService,
    email: str,
    password: str,
    profile_kind: ProfileKind,
) -> tuple[AnyProfile, Session]:
    """Register a new member and sign them in.

    The account is deleted again if the profile cannot be stored, so a
    failed registration can be retried with the same e-mail address.

    Args:
        provider: Identity provider creating the account.
        profiles: Profile service storing the blank profile.
        email: E-mail address of the new account.
        password: Plain password.
        profile_kind: company or freelancer.

    Returns:
        Tuple of (new profile, open session).

    Raises:
        InvalidRegistration: If the e-mail or password is rejected.
        EmailAlreadyInUse: If the e-mail is already registered.
    """
    user_id = provider.create_account(email, password)
    try:
        profile = profiles.register_profile(user_id, email, ProfileKind(profile_kind))
    except Exception:
        logger.warning("registration_rolled_back", user_id=user_id)
        provider.delete_account(email)
        raise
    session = provider.sign_in(email, password)
    return profile, session
