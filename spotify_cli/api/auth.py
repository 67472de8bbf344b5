"""
Handles the login to the streaming service through librespot.
"""

import asyncio
import logging

from librespot.core import Session

from spotify_cli.exceptions import AuthenticationError

log = logging.getLogger(__name__)


class SpotifyAuthenticator:
    """Creates authenticated librespot sessions."""

    async def authenticate_with_credentials(self, username: str, password: str) -> Session:
        """
        Logs in with a username and password.

        Args:
            username: The account login name.
            password: The account password.

        Returns:
            The connected librespot session.
        """
        log.debug(f"Authenticating as: {username}")
        try:
            session = await asyncio.to_thread(
                lambda: Session.Builder().user_pass(username, password).create()
            )
        except Exception as e:
            raise AuthenticationError(f"cannot log in: {str(e).lower()}") from e

        log.debug(f"Session established for {username}.")
        return session
