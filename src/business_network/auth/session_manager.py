# ABOUTME: Session manager for keeping the CLI's session tokens in the OS keyring.
# ABOUTME: Stores one token per local account name and keeps a list of account names.

import json
from pathlib import Path
from typing import Any

import keyring


class SessionManager:
    """Service for managing session token storage using the OS keyring."""

    SERVICE_NAME = "business-network"
    DEFAULT_ACCOUNTS_FILE = Path.home() / ".business-network" / "accounts.json"

    def __init__(self, accounts_file: Path | None = None) -> None:
        """Initialize the session manager.

        Args:
            accounts_file: Path to JSON file storing account names.
                Defaults to ~/.business-network/accounts.json
        """
        self.accounts_file = (
            accounts_file if accounts_file is not None else self.DEFAULT_ACCOUNTS_FILE
        )

    def store_session(self, token: str, user_id: str, account_name: str = "default") -> None:
        """Store a session token in the OS keyring.

        Args:
            token: The session token issued at sign-in.
            user_id: Id of the signed-in member, kept for display.
            account_name: Name to identify this local account. Defaults to "default".
        """
        session_data = json.dumps({"session": token, "user_id": user_id})
        keyring.set_password(self.SERVICE_NAME, account_name, session_data)
        self._add_account_to_list(account_name)

    def get_session(self, account_name: str = "default") -> dict[str, str] | None:
        """Retrieve the stored session of an account.

        Args:
            account_name: Name of the account to retrieve. Defaults to "default".

        Returns:
            Dictionary with 'session' and 'user_id' keys if found, None otherwise.
        """
        stored = keyring.get_password(self.SERVICE_NAME, account_name)
        if stored is None:
            return None

        try:
            data = json.loads(stored)
        except json.JSONDecodeError:
            return None
        if isinstance(data, dict) and data.get("session"):
            return {"session": str(data["session"]), "user_id": str(data.get("user_id", ""))}
        return None

    def get_token(self, account_name: str = "default") -> str | None:
        """Return the stored session token of an account, or None."""
        session = self.get_session(account_name)
        return session["session"] if session is not None else None

    def delete_session(self, account_name: str = "default") -> None:
        """Delete a stored session from the OS keyring.

        Args:
            account_name: Name of the account to delete. Defaults to "default".
        """
        keyring.delete_password(self.SERVICE_NAME, account_name)
        self._remove_account_from_list(account_name)

    def list_accounts(self) -> list[str]:
        """List all stored account names.

        Returns:
            List of account names that have stored sessions.
        """
        return self._load_accounts()

    def _load_accounts(self) -> list[str]:
        """Load account names from the accounts file.

        Returns:
            List of account names, or empty list if file doesn't exist or is empty/invalid.
        """
        if not self.accounts_file.exists():
            return []

        try:
            content = self.accounts_file.read_text().strip()
            if not content:
                return []
            data: dict[str, Any] = json.loads(content)
            accounts = data.get("accounts", [])
            if isinstance(accounts, list):
                return [str(acc) for acc in accounts]
            return []
        except (json.JSONDecodeError, OSError):
            return []

    def _save_accounts(self, accounts: list[str]) -> None:
        self.accounts_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.accounts_file, "w") as f:
            json.dump({"accounts": accounts}, f, indent=2)

    def _add_account_to_list(self, account_name: str) -> None:
        accounts = self._load_accounts()
        if account_name not in accounts:
            accounts.append(account_name)
            self._save_accounts(accounts)

    def _remove_account_from_list(self, account_name: str) -> None:
        accounts = self._load_accounts()
        if account_name in accounts:
            accounts.remove(account_name)
            self._save_accounts(accounts)
