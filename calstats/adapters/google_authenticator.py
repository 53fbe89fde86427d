"""
Google Calendar authentication using the installed-app OAuth flow.
"""

from pathlib import Path

from google.auth.exceptions import GoogleAuthError, RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from rich.console import Console

from ..domain.exceptions import AuthenticationError

console = Console(stderr=True)


class GoogleAuthenticator:
    """
    Handles authentication with the Google Calendar API.

    This flow is ideal for CLI applications:
    1. Cached credentials are reused while valid
    2. Expired credentials are refreshed with their refresh token
    3. Otherwise a browser is opened for the user to grant access
    4. The resulting token is cached for the next run
    """

    # Required scopes for calendar access
    SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

    def __init__(self, credentials_file: Path, token_file: Path | None = None):
        """
        Initialize the authenticator.

        Args:
            credentials_file: OAuth client secrets downloaded from Google Cloud
            token_file: Optional path to the token cache file
        """
        self.credentials_file = credentials_file
        self.token_file = token_file or Path.home() / ".calstats_token.json"

    def _load_cached(self) -> Credentials | None:
        """Load cached credentials from disk if they exist."""
        if not self.token_file.exists():
            return None

        try:
            return Credentials.from_authorized_user_file(str(self.token_file), self.SCOPES)
        except (ValueError, OSError) as e:
            console.print(f"[yellow]Warning: Could not load token cache: {e}[/yellow]")
            return None

    def _save_cache(self, creds: Credentials) -> None:
        """Save credentials to disk."""
        try:
            with open(self.token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
            # Set restrictive permissions (owner only)
            self.token_file.chmod(0o600)
        except OSError as e:
            console.print(f"[yellow]Warning: Could not save token cache: {e}[/yellow]")

    def get_credentials(self, force_refresh: bool = False) -> Credentials:
        """
        Get valid credentials, using the cache or running the OAuth flow.

        Args:
            force_refresh: Force authentication even if cached credentials exist

        Returns:
            Google OAuth credentials

        Raises:
            AuthenticationError: If authentication fails
        """
        creds = None if force_refresh else self._load_cached()

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                self._save_cache(creds)
                return creds
            except RefreshError as e:
                console.print(f"[yellow]Token refresh failed, re-authenticating: {e}[/yellow]")

        return self._authenticate_installed_app_flow()

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a valid bearer token for the Calendar REST API."""
        return self.get_credentials(force_refresh=force_refresh).token

    def _authenticate_installed_app_flow(self) -> Credentials:
        """
        Perform the installed-app OAuth flow in the user's browser.

        Raises:
            AuthenticationError: If the client secrets are missing or the flow fails
        """
        if not self.credentials_file.exists():
            raise AuthenticationError(
                f"OAuth client secrets not found: {self.credentials_file}\n"
                "Download them from the Google Cloud Console."
            )

        console.print("\n[bold cyan]Google Authentication Required[/bold cyan]")
        console.print("A browser window will open to grant read access to your calendars.\n")

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self.credentials_file), self.SCOPES
            )
            creds = flow.run_local_server(port=0)
        except (GoogleAuthError, ValueError, OSError) as e:
            raise AuthenticationError(f"Authentication failed: {e}") from e

        console.print("[bold green]✓ Authentication successful![/bold green]\n")

        self._save_cache(creds)

        return creds

    def clear_cache(self) -> None:
        """Clear the token cache (force re-authentication next time)."""
        if self.token_file.exists():
            self.token_file.unlink()
