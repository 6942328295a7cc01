# ABOUTME: Local identity provider: accounts with salted password hashes and session tokens.
# ABOUTME: Issues stable user ids and gives the authoritative verdict on session validity.

import hashlib
import hmac
import re
import secrets
import uuid
from datetime import UTC, datetime

import structlog
from pydantic import BaseModel

from business_network.errors import UnauthenticatedError
from business_network.identity.exceptions import (
    EmailAlreadyInUse,
    InvalidCredentials,
    InvalidRegistration,
)
from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.ports import DocumentStore

logger = structlog.get_logger(__name__)

ACCOUNTS_COLLECTION = "accounts"
SESSIONS_COLLECTION = "sessions"

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Session(BaseModel):
    """An authenticated session."""

    token: str
    user_id: str
    created_at: datetime


def normalize_email(email: str) -> str:
    """Return the form of an e-mail address used as account key."""
    return email.strip().lower()


class LocalIdentityProvider:
    """Account and session management backed by the document store.

    Stands in for a hosted authentication service: it creates accounts,
    signs members in, and verifies session tokens.
    """

    def __init__(
        self,
        store: DocumentStore,
        min_password_length: int = 6,
        hash_iterations: int = 200_000,
    ) -> None:
        """Initialize the identity provider.

        Args:
            store: Document store for the accounts and sessions collections.
            min_password_length: Shortest password accepted at registration.
            hash_iterations: PBKDF2 iteration count for new password hashes.
        """
        self._store = store
        self._min_password_length = min_password_length
        self._hash_iterations = hash_iterations

    def _hash_password(self, password: str, salt: bytes, iterations: int) -> str:
        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
        return digest.hex()

    def create_account(self, email: str, password: str) -> str:
        """Create an account and return its new user id.

        Args:
            email: E-mail address; unique across accounts (case-insensitive).
            password: Plain password, at least min_password_length characters.

        Returns:
            The stable user id of the new account.

        Raises:
            InvalidRegistration: If the e-mail or password is rejected.
            EmailAlreadyInUse: If an account exists for the e-mail address.
        """
        normalized = normalize_email(email)
        if not _EMAIL_PATTERN.match(normalized):
            raise InvalidRegistration("Invalid email address")
        if len(password) < self._min_password_length:
            raise InvalidRegistration(
                f"Password must be at least {self._min_password_length} characters"
            )

        user_id = uuid.uuid4().hex
        salt = secrets.token_bytes(16)
        record = {
            "user_id": user_id,
            "email": normalized,
            "salt": salt.hex(),
            "iterations": self._hash_iterations,
            "password_hash": self._hash_password(password, salt, self._hash_iterations),
            "created_at": datetime.now(UTC).isoformat(),
        }
        try:
            self._store.create(ACCOUNTS_COLLECTION, normalized, record)
        except DocumentAlreadyExists as e:
            raise EmailAlreadyInUse("An account with this email already exists.") from e

        logger.info("account_created", user_id=user_id)
        return user_id

    def delete_account(self, email: str) -> bool:
        """Delete the account registered with an e-mail address.

        Returns:
            True if an account was deleted, False if none existed.
        """
        deleted = self._store.delete(ACCOUNTS_COLLECTION, normalize_email(email))
        if deleted:
            logger.info("account_deleted")
        return deleted

    def sign_in(self, email: str, password: str) -> Session:
        """Check credentials and open a session.

        Raises:
            InvalidCredentials: If the e-mail is unknown or the password is wrong.
        """
        account = self._store.get(ACCOUNTS_COLLECTION, normalize_email(email))
        if account is None:
            raise InvalidCredentials("Invalid email or password")

        expected = account["password_hash"]
        actual = self._hash_password(
            password, bytes.fromhex(account["salt"]), int(account["iterations"])
        )
        if not hmac.compare_digest(expected, actual):
            logger.info("sign_in_rejected", user_id=account["user_id"])
            raise InvalidCredentials("Invalid email or password")

        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=account["user_id"],
            created_at=datetime.now(UTC),
        )
        self._store.create(SESSIONS_COLLECTION, session.token, session.model_dump(mode="json"))
        logger.info("signed_in", user_id=session.user_id)
        return session

    def verify_session(self, token: str | None) -> str:
        """Return the user id owning a session token.

        Raises:
            UnauthenticatedError: If the token is missing or unknown.
        """
        if not token:
            raise UnauthenticatedError("Not signed in")
        record = self._store.get(SESSIONS_COLLECTION, token)
        if record is None:
            raise UnauthenticatedError("Session expired or invalid")
        return str(record["user_id"])

    def is_session_valid(self, token: str) -> bool:
        """Return True if the token belongs to an open session."""
        try:
            self.verify_session(token)
        except UnauthenticatedError:
            return False
        return True

    def sign_out(self, token: str) -> None:
        """Close a session. Closing an unknown session is a no-op."""
        if self._store.delete(SESSIONS_COLLECTION, token):
            logger.info("signed_out")
